#!/usr/bin/env python3
"""
Seed script to add demo users and patients to the Case Manager database.
Run with: python seed_data.py
"""

import sys
import os

# Add the backend directory to the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy.orm import Session

from case_manager.database import Base, SessionLocal, engine
from case_manager.models.patient import Patient
from case_manager.models.user import User
from case_manager.services.auth import get_password_hash

# Users to create
USERS = [
    {
        "username": "admin",
        "email": "admin@case-manager.local",
        "full_name": "Admin",
        "password": "Admin@123",
        "is_admin": True,
    },
    {
        "username": "hotline",
        "email": "hotline@case-manager.local",
        "full_name": "Hotline Volunteer",
        "password": "Hotline@123",
        "is_admin": False,
    },
]

# Patients to create
PATIENTS = [
    {"name": "Susan Everyteen", "primary_phone": "123-123-1234"},
    {"name": "Susan Everyother", "primary_phone": "555-867-5309"},
]


def seed(session: Session) -> None:
    """Create or update the demo users and patients."""
    for user_data in USERS:
        user = session.query(User).filter(User.username == user_data["username"]).first()
        if user:
            print(f"User '{user_data['username']}' already exists (ID: {user.id}). Updating...")
        else:
            print(f"Creating user '{user_data['username']}'...")
            user = User(username=user_data["username"])
            session.add(user)
        user.email = user_data["email"]
        user.full_name = user_data["full_name"]
        user.hashed_password = get_password_hash(user_data["password"])
        user.is_admin = user_data["is_admin"]
        user.is_active = True

    for patient_data in PATIENTS:
        existing = session.query(Patient).filter(
            Patient.primary_phone == patient_data["primary_phone"]
        ).first()
        if existing:
            print(f"Patient '{existing.name}' already exists (ID: {existing.id})")
            continue
        print(f"Creating patient '{patient_data['name']}'...")
        session.add(Patient(**patient_data))

    session.commit()


def main():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed(session)
        print("\nUsers and patients created/updated successfully!")
        print("\n" + "=" * 60)
        print("USER CREDENTIALS:")
        print("=" * 60)
        for user in USERS:
            print(f"  {user['username']:18} | Pass: {user['password']:15}")
        print("=" * 60)
    except Exception as e:
        print(f"Error: {e}")
        session.rollback()
        sys.exit(1)
    finally:
        session.close()


if __name__ == "__main__":
    main()
