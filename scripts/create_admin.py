#!/usr/bin/env python3
"""
Create an admin account. Signup does not hand out the admin role unless
ALLOW_ADMIN_SIGNUP is set, so the first admin is created here.

Usage:
  python scripts/create_admin.py admin@example.com "Site Admin"
  # Prompts for the password; requires DATABASE_URL and SECRET_KEY
"""
import argparse
import asyncio
import getpass
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import AsyncSessionLocal, close_db
from app.models.enums import UserRole
from app.services.user_service import UserService


async def create_admin(email: str, full_name: str, password: str) -> bool:
    async with AsyncSessionLocal() as db:
        user = await UserService.create_user(
            db,
            email=email,
            password=password,
            full_name=full_name,
            role=UserRole.ADMIN,
        )
    await close_db()
    return user is not None


def main():
    parser = argparse.ArgumentParser(description="Create an admin account")
    parser.add_argument("email")
    parser.add_argument("full_name")
    args = parser.parse_args()

    password = getpass.getpass("Password: ")
    if len(password) < 6:
        print("ERROR: password must be at least 6 characters.")
        sys.exit(1)

    if asyncio.run(create_admin(args.email, args.full_name, password)):
        print(f"SUCCESS: admin {args.email} created.")
    else:
        print(f"FAILED: {args.email} is already registered.")
        sys.exit(1)


if __name__ == "__main__":
    main()
