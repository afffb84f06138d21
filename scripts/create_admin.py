"""
Admin account seeding script

Creates an ADMIN login (and its contact record) from environment variables:

    ADMIN_EMAIL     required
    ADMIN_PASSWORD  required, at least 6 characters
    ADMIN_NAME      optional, defaults to "Administrator"

Run:
    python scripts/create_admin.py
"""

import asyncio
import os
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

from app.core.exceptions import ConflictError
from app.core.logging import setup_logging, get_logger
from app.db.mongo import connect_to_mongo, close_mongo_connection
from app.db.indexes import create_indexes
from app.schemas.account import signup_schema
from app.schemas.validation import ValidationFailure
from app.services import user_service

setup_logging()
logger = get_logger("scripts.create_admin")


async def main() -> int:
    email = os.getenv("ADMIN_EMAIL", "")
    password = os.getenv("ADMIN_PASSWORD", "")
    name = os.getenv("ADMIN_NAME", "Administrator")

    # Same rules as customer sign-up for name, e-mail and password
    result = signup_schema.validate({"name": name, "email": email, "password": password})
    if isinstance(result, ValidationFailure):
        for error in result.errors:
            logger.error(f"ADMIN {error.field}: {error.message}")
        return 1

    await connect_to_mongo()
    try:
        await create_indexes()
        admin = await user_service.create_admin(result.value.email, result.value.password, result.value.name)
        logger.info(f"Admin account ready: {admin['email']}")
        return 0
    except ConflictError:
        logger.warning(f"An account already exists for {email}")
        return 1
    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
