import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import PermissionDenied, ValidationError
from app.models.client import Client
from app.services.client_import import import_clients

HEADER = "full_name,phone,email,status,property_location,assigned_agent_id\n"


def _csv(*rows):
    return (HEADER + "".join(row + "\n" for row in rows)).encode("utf-8")


def test_row_missing_email_is_rejected_and_others_are_stored(db, manager):
    payload = _csv(
        "John Doe,1112223333,john.doe@example.com,new,New York,",
        "Jane Smith,4445556666,,in-progress,Los Angeles,",
        "Robert Brown,7778889999,robert.brown@example.com,new,Chicago,",
    )

    report = import_clients(db, payload, manager, content_type="text/csv")

    assert (report.accepted, report.rejected) == (2, 1)
    assert report.to_dict() == {"message": "CSV import completed", "successCount": 2, "errorCount": 1}
    names = sorted(c.full_name for c in db.query(Client).all())
    assert names == ["John Doe", "Robert Brown"]


def test_counts_add_up_to_parsed_rows(db, manager):
    payload = _csv(
        "Valid One,1112223333,one@example.com,new,,",
        "Bad Phone,12,two@example.com,new,,",
        "Bad Email,1112223333,nope,new,,",
        ",1112223333,four@example.com,new,,",
        "Valid Five,1112223333,five@example.com,closed,,",
    )

    report = import_clients(db, payload, manager)

    assert report.total_rows == 5
    assert report.accepted == 2
    assert report.accepted + report.rejected == report.total_rows
    assert db.query(Client).count() == report.accepted


def test_imported_rows_get_fresh_ids_and_timestamps(db, manager, agent):
    payload = _csv(
        f"John Doe,1112223333,john.doe@example.com,new,New York,{agent.user_id}",
        "Jane Smith,4445556666,jane@example.com,new,,",
    )

    import_clients(db, payload, manager)

    john = db.query(Client).filter(Client.full_name == "John Doe").one()
    jane = db.query(Client).filter(Client.full_name == "Jane Smith").one()
    assert john.client_id != jane.client_id
    assert john.assigned_agent_id == agent.user_id
    assert jane.assigned_agent_id is None
    assert john.created_at is not None
    assert john.created_at == john.updated_at
    assert john.deleted_at is None


def test_agent_cannot_import_and_nothing_is_stored(db, agent):
    payload = _csv("John Doe,1112223333,john.doe@example.com,new,,")

    with pytest.raises(PermissionDenied):
        import_clients(db, payload, agent)

    assert db.query(Client).count() == 0


def test_permission_is_checked_before_payload(db, agent):
    with pytest.raises(PermissionDenied):
        import_clients(db, None, agent)


def test_missing_payload_is_a_request_error(db, manager):
    with pytest.raises(ValidationError):
        import_clients(db, b"", manager)


def test_unsupported_content_type_is_a_request_error(db, manager):
    payload = _csv("John Doe,1112223333,john.doe@example.com,new,,")

    with pytest.raises(ValidationError):
        import_clients(db, payload, manager, content_type="image/png")

    assert db.query(Client).count() == 0


def test_content_type_parameters_are_ignored(db, manager):
    payload = _csv("John Doe,1112223333,john.doe@example.com,new,,")

    report = import_clients(db, payload, manager, content_type="text/csv; charset=utf-8")

    assert report.accepted == 1


def test_store_failure_rejects_only_that_row(db, manager, monkeypatch):
    payload = _csv(
        "John Doe,1112223333,john.doe@example.com,new,,",
        "Jane Smith,4445556666,jane@example.com,new,,",
        "Robert Brown,7778889999,robert@example.com,new,,",
    )
    original_commit = db.commit
    calls = {"count": 0}

    def flaky_commit():
        calls["count"] += 1
        if calls["count"] == 2:
            raise OperationalError("INSERT INTO clients", {}, Exception("connection lost"))
        return original_commit()

    monkeypatch.setattr(db, "commit", flaky_commit)

    report = import_clients(db, payload, manager)

    assert (report.accepted, report.rejected) == (2, 1)
    monkeypatch.undo()
    names = sorted(c.full_name for c in db.query(Client).all())
    assert names == ["John Doe", "Robert Brown"]
