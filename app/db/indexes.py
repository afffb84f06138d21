"""
app/db/indexes.py

Purpose: Database index management

- Unique indexes backing slug / e-mail / GST number / coupon code checks
- Lookup indexes for catalog filters
- TTL index for automatic session cleanup
"""

from pymongo import ASCENDING, DESCENDING

from app.db.mongo import (
    get_users_collection,
    get_contacts_collection,
    get_products_collection,
    get_sessions_collection,
    get_coupons_collection,
)
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes():
    """
    Creates all necessary database indexes.
    This function is idempotent - safe to run multiple times.
    """
    try:
        users = get_users_collection()
        contacts = get_contacts_collection()
        products = get_products_collection()
        sessions = get_sessions_collection()
        coupons = get_coupons_collection()

        logger.info("Creating database indexes...")

        # ==============================================
        # USERS
        # ==============================================

        await users.create_index("email", unique=True, name="email_unique")
        await users.create_index("contact_id", name="user_contact_idx")
        logger.debug("Created indexes on users")

        # ==============================================
        # CONTACTS
        # ==============================================

        # Only contacts that carry a GST number take part in uniqueness
        await contacts.create_index(
            "gst_number",
            unique=True,
            partialFilterExpression={"gst_number": {"$type": "string"}},
            name="gst_number_unique"
        )
        await contacts.create_index("type", name="contact_type_idx")
        await contacts.create_index([("created_at", DESCENDING)], name="contact_created_idx")
        logger.debug("Created indexes on contacts")

        # ==============================================
        # PRODUCTS
        # ==============================================

        await products.create_index("slug", unique=True, name="slug_unique")
        await products.create_index(
            [("is_published", ASCENDING), ("category", ASCENDING), ("type", ASCENDING)],
            name="catalog_filter_idx"
        )
        await products.create_index([("created_at", DESCENDING)], name="product_created_idx")
        await products.create_index("price", name="product_price_idx")
        logger.debug("Created indexes on products")

        # ==============================================
        # SESSIONS
        # ==============================================

        await sessions.create_index("token_hash", unique=True, name="token_hash_unique")
        await sessions.create_index("user_id", name="session_user_idx")

        # Delete when expires_at is reached
        await sessions.create_index(
            "expires_at",
            expireAfterSeconds=0,
            name="session_expiry_ttl_idx"
        )
        logger.debug("Created indexes on sessions")

        # ==============================================
        # COUPONS
        # ==============================================

        await coupons.create_index("code", unique=True, name="coupon_code_unique")
        await coupons.create_index("discount_offer_id", name="coupon_offer_idx")
        logger.debug("Created indexes on coupons")

        logger.info("All database indexes created successfully")

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise


if __name__ == "__main__":
    """
    Run this module directly to create indexes manually.
    """
    import asyncio
    from app.db.mongo import connect_to_mongo, close_mongo_connection

    async def main():
        await connect_to_mongo()
        await create_indexes()
        await close_mongo_connection()

    asyncio.run(main())
