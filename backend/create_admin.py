"""
Create an admin account for the dashboard.

Usage: python create_admin.py <email> <password> [name]
"""

import asyncio
import sys

from queueadmin.config import get_settings
from queueadmin.database import Database, DocumentStore
from queueadmin.services.auth_service import AuthService


async def create_admin(email: str, password: str, name: str = ""):
    settings = get_settings()

    print(f"Connecting to {settings.MONGODB_URL}...")
    await Database.connect()
    try:
        admin = await AuthService(DocumentStore(Database.db)).create_admin(email, password, name)
        print(f"Created admin {admin.email} ({admin.id})")
    except ValueError as e:
        print(f"Error: {e}")
    finally:
        await Database.disconnect()


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print(__doc__.strip())
        sys.exit(1)
    asyncio.run(create_admin(*sys.argv[1:4]))
