from datetime import datetime

import factory
from factory.alchemy import SQLAlchemyModelFactory

from app.core.security import create_access_token, get_password_hash
from app.models.client import Client, ClientStatus
from app.models.user import User, UserRole


class UserFactory(SQLAlchemyModelFactory):
    """Factory for creating User rows. Pass password="..." for a real bcrypt hash."""

    class Meta:
        model = User
        sqlalchemy_session_persistence = "commit"

    class Params:
        password = None

    name = factory.Sequence(lambda n: f"User {n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    password_hash = factory.LazyAttribute(
        lambda o: get_password_hash(o.password) if o.password else "!"
    )
    role = UserRole.AGENT.value
    is_active = True


class ClientFactory(SQLAlchemyModelFactory):
    """Factory for creating Client rows."""

    class Meta:
        model = Client
        sqlalchemy_session_persistence = "commit"

    full_name = factory.Sequence(lambda n: f"Client {n}")
    phone = "5551234567"
    email = factory.Sequence(lambda n: f"client{n}@example.com")
    status = ClientStatus.NEW.value
    assigned_agent_id = None
    created_at = factory.LazyFunction(datetime.utcnow)
    updated_at = factory.LazyAttribute(lambda o: o.created_at)


def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": user.user_id, "name": user.name, "role": user.role})
    return {"Authorization": f"Bearer {token}"}
