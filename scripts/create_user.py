#!/usr/bin/env python3
"""Create a local user and store a development access token.

Tokens are normally issued by the identity provider; this is for local
testing against a development database only.

Usage:
    python scripts/create_user.py --email driver@example.com --name "Test Driver"
"""

import argparse
import asyncio
from pathlib import Path

from sqlalchemy import select

from chargeslot.core.security import create_user_token
from chargeslot.database import AsyncSessionLocal
from chargeslot.models.user import User

TOKEN_FILE = Path(__file__).parent.parent / ".token"


async def create_user(email: str, name: str) -> str:
    """Create the user if missing and return a fresh access token."""
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if user:
            user.name = name
            user.is_active = True
            print(f"Updated existing user: {email}")
        else:
            user = User(email=email, name=name, is_active=True)
            session.add(user)
            print(f"Created user: {email}")

        await session.commit()
        token = create_user_token(user.id, user.email)

    TOKEN_FILE.write_text(token)
    print(f"User ID: {user.id}")
    print(f"Token written to {TOKEN_FILE}")
    return token


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a user and a development token")
    parser.add_argument("--email", default="driver@chargeslot.dev", help="User email")
    parser.add_argument("--name", default="Test Driver", help="Display name")
    args = parser.parse_args()

    asyncio.run(create_user(email=args.email, name=args.name))
