#!/usr/bin/env python3
"""Script to create users (including admins) in the database."""

import sys
from pathlib import Path

# Add parent directory to path so we can import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.database import SessionLocal
from app.core.errors import PromptHubError
from app.models.user import User, UserRole
from app.users.crud import UserCRUD


def create_user(username: str, email: str, password: str, role: UserRole = UserRole.USER) -> User:
    """Create a new user in the database."""
    db = SessionLocal()
    try:
        user = UserCRUD.register(db, username=username, email=email, password=password, role=role)
    except PromptHubError as e:
        print(f"❌ {e.message}")
        sys.exit(1)
    finally:
        db.close()

    print("✅ User created successfully!")
    print(f"   ID: {user.id}")
    print(f"   Username: {user.username}")
    print(f"   Email: {user.email}")
    print(f"   Role: {user.role}")
    return user


def main():
    """Main entry point for the script."""
    if len(sys.argv) < 4:
        print("Usage: python create_user.py <username> <email> <password> [role]")
        print("\nExample:")
        print("  python create_user.py admin admin@example.com secret123 admin")
        print("  python create_user.py alice alice@example.com secret1")
        print("\nRoles: user, admin")
        sys.exit(1)

    username, email, password = sys.argv[1:4]
    role = sys.argv[4] if len(sys.argv) > 4 else UserRole.USER.value

    try:
        role = UserRole(role)
    except ValueError:
        print(f"❌ Invalid role '{role}'. Must be: user, admin")
        sys.exit(1)

    create_user(username=username, email=email, password=password, role=role)


if __name__ == "__main__":
    main()
