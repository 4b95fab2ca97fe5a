from datetime import datetime

import pytest

from app.core.errors import ValidationError
from app.models.client import Client
from app.schemas.client import ClientCreate
from app.services.row_validator import validate_row


def _row(**overrides):
    row = {
        "full_name": "John Doe",
        "phone": "1112223333",
        "email": "john.doe@example.com",
        "status": "new",
    }
    row.update(overrides)
    return row


def test_valid_row_defaults_optional_fields_to_none():
    record = validate_row(_row())

    assert record.full_name == "John Doe"
    assert record.email == "john.doe@example.com"
    assert record.property_location is None
    assert record.assigned_agent_id is None
    assert record.next_follow_up_date is None


def test_blank_cells_are_treated_as_absent():
    record = validate_row(_row(property_type="  ", notes="", assigned_agent_id=""))

    assert record.property_type is None
    assert record.notes is None
    assert record.assigned_agent_id is None


def test_values_are_trimmed_and_unknown_columns_ignored():
    record = validate_row(_row(full_name="  Jane Smith ", favourite_colour="blue"))

    assert record.full_name == "Jane Smith"
    assert not hasattr(record, "favourite_colour")


def test_missing_email_names_the_field():
    row = _row()
    del row["email"]

    with pytest.raises(ValidationError) as exc_info:
        validate_row(row)

    assert exc_info.value.fields == ["email"]


def test_several_missing_fields_are_all_reported():
    with pytest.raises(ValidationError) as exc_info:
        validate_row({"full_name": "Nobody"})

    assert set(exc_info.value.fields) == {"phone", "email", "status"}


def test_malformed_email_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_row(_row(email="not-an-email"))

    assert exc_info.value.fields == ["email"]


def test_too_short_phone_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_row(_row(phone="123"))

    assert exc_info.value.fields == ["phone"]


def test_invalid_date_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_row(_row(last_contact_date="yesterday"))

    assert exc_info.value.fields == ["last_contact_date"]


def test_dates_are_parsed_to_naive_utc():
    record = validate_row(_row(next_follow_up_date="2023-10-20T17:30:00+02:00"))

    assert record.next_follow_up_date == datetime(2023, 10, 20, 15, 30)


def test_long_free_text_status_is_accepted():
    record = validate_row(_row(status="waiting for mortgage approval from the second bank"))

    assert record.status == "waiting for mortgage approval from the second bank"


def test_oversized_assignee_id_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_row(_row(assigned_agent_id="x" * 37))

    assert exc_info.value.fields == ["assigned_agent_id"]


def _max_length(field):
    for meta in field.metadata:
        limit = getattr(meta, "max_length", None)
        if limit is not None:
            return limit
    return None


@pytest.mark.parametrize("name", sorted(ClientCreate.model_fields))
def test_accepted_values_fit_the_client_column(name):
    column = Client.__table__.columns[name]
    column_length = getattr(column.type, "length", None)
    if column_length is None:
        return

    field_limit = _max_length(ClientCreate.model_fields[name])

    assert field_limit is not None and field_limit <= column_length
