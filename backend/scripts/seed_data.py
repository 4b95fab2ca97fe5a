"""
Скрипт для заполнения БД тестовыми данными
"""
import sys
import os
from datetime import datetime, timedelta
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import Session
from app.core.database import SessionLocal, engine, Base
from app.core.security import get_password_hash
from app.models.user import User, UserRole
from app.models.client import Client, ClientStatus


def seed_data():
    Base.metadata.create_all(bind=engine)
    db: Session = SessionLocal()

    try:
        # Создаем пользователей
        users_data = [
            {"name": "Alice Agent", "email": "alice.agent@example.com", "password": "alice123", "role": UserRole.AGENT},
            {"name": "Bob Agent", "email": "bob.agent@example.com", "password": "bob12345", "role": UserRole.AGENT},
            {"name": "Charlie Manager", "email": "charlie.manager@example.com", "password": "charlie123", "role": UserRole.MANAGER},
        ]

        users = {}
        for user_data in users_data:
            user = db.query(User).filter(User.email == user_data["email"]).first()
            if not user:
                user = User(
                    name=user_data["name"],
                    email=user_data["email"],
                    password_hash=get_password_hash(user_data["password"]),
                    role=user_data["role"].value,
                    is_active=True
                )
                db.add(user)
                db.flush()
            users[user_data["email"]] = user

        # Создаем клиентов
        now = datetime.utcnow()
        clients_data = [
            {
                "full_name": "John Doe", "phone": "1112223333", "email": "john.doe@example.com",
                "property_location": "New York", "property_type": "residential",
                "budget_range": "$300k-$500k", "status": ClientStatus.NEW.value,
                "next_follow_up_date": now + timedelta(days=7),
                "assigned_agent_id": users["alice.agent@example.com"].user_id,
            },
            {
                "full_name": "Jane Smith", "phone": "4445556666", "email": "jane.smith@example.com",
                "property_location": "Los Angeles", "property_type": "commercial",
                "budget_range": "$1M-$2M", "status": ClientStatus.IN_PROGRESS.value,
                "next_follow_up_date": now - timedelta(days=1),
                "assigned_agent_id": users["bob.agent@example.com"].user_id,
            },
        ]

        for client_data in clients_data:
            existing = db.query(Client).filter(Client.email == client_data["email"]).first()
            if not existing:
                db.add(Client(**client_data, created_at=now, updated_at=now))

        db.commit()
        print("✅ Seed data created successfully!")

    except Exception as e:
        db.rollback()
        print(f"❌ Error: {e}")
    finally:
        db.close()


if __name__ == "__main__":
    seed_data()
