import asyncio

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import ConflictError, ResourceNotFoundError, ValidationError
from app.schemas.account import SignupInput
from app.schemas.contact import ContactInput
from app.schemas.discount import coupon_schema
from app.schemas.product import ProductInput
from app.services import contact_service, discount_service, product_service, user_service


def run(coro):
    return asyncio.run(coro)


# ============================================================
# PRODUCTS
# ============================================================

def test_create_product_rejects_used_slug(fake_db, valid_product):
    product = ProductInput.model_validate(valid_product)

    created = run(product_service.create_product(product))
    assert created["slug"] == "blue-shirt-v2"
    assert isinstance(created["id"], str)

    with pytest.raises(ConflictError) as exc_info:
        run(product_service.create_product(product))

    assert exc_info.value.message == "Product with this slug already exists"
    assert len(fake_db.products.documents) == 1


def test_create_product_maps_duplicate_key_to_conflict(fake_db, valid_product):
    fake_db.products.insert_error = DuplicateKeyError("slug_unique")

    with pytest.raises(ConflictError):
        run(product_service.create_product(ProductInput.model_validate(valid_product)))


def test_update_product_rejects_slug_of_another_product(fake_db, valid_product):
    first = run(product_service.create_product(ProductInput.model_validate(valid_product)))
    run(product_service.create_product(ProductInput.model_validate({**valid_product, "slug": "red-shirt"})))

    with pytest.raises(ConflictError):
        run(product_service.update_product(first["id"], ProductInput.model_validate({**valid_product, "slug": "red-shirt"})))


def test_update_product_may_keep_its_own_slug(fake_db, valid_product):
    first = run(product_service.create_product(ProductInput.model_validate(valid_product)))

    updated = run(product_service.update_product(first["id"], ProductInput.model_validate({**valid_product, "price": 25})))

    assert updated["price"] == 25
    assert updated["slug"] == "blue-shirt-v2"


@pytest.mark.parametrize("product_id", ["64e000000000000000000001", "not-an-id"])
def test_update_unknown_product(fake_db, valid_product, product_id):
    with pytest.raises(ResourceNotFoundError):
        run(product_service.update_product(product_id, ProductInput.model_validate(valid_product)))


# ============================================================
# CONTACTS
# ============================================================

def test_create_contact_rejects_used_gst_number(fake_db, valid_contact):
    run(contact_service.create_contact(ContactInput.model_validate(valid_contact)))

    with pytest.raises(ConflictError) as exc_info:
        run(contact_service.create_contact(ContactInput.model_validate({**valid_contact, "name": "Other Mills"})))

    assert exc_info.value.message == "Contact with this GST number already exists"


def test_contacts_without_gst_number_never_conflict(fake_db, valid_contact):
    for name in ("First Vendor", "Second Vendor"):
        run(contact_service.create_contact(ContactInput.model_validate({**valid_contact, "name": name, "gstNumber": ""})))

    assert [doc["gst_number"] for doc in fake_db.contacts.documents] == [None, None]


def test_update_contact_rejects_gst_number_of_another_contact(fake_db, valid_contact):
    first = run(contact_service.create_contact(ContactInput.model_validate(valid_contact)))
    run(contact_service.create_contact(ContactInput.model_validate({**valid_contact, "gstNumber": "27AAACR5055K1Z7"})))

    with pytest.raises(ConflictError):
        run(contact_service.update_contact(first["id"], ContactInput.model_validate({**valid_contact, "gstNumber": "27AAACR5055K1Z7"})))

    # Keeping its own number is fine
    updated = run(contact_service.update_contact(first["id"], ContactInput.model_validate({**valid_contact, "city": "Vadodara"})))
    assert updated["city"] == "Vadodara"


def test_gst_duplicate_key_on_insert_is_a_conflict(fake_db, valid_contact):
    fake_db.contacts.insert_error = DuplicateKeyError("gst_number_unique")

    with pytest.raises(ConflictError):
        run(contact_service.create_contact(ContactInput.model_validate(valid_contact)))


def test_gst_duplicate_key_on_update_is_a_conflict(fake_db, valid_contact):
    created = run(contact_service.create_contact(ContactInput.model_validate(valid_contact)))
    fake_db.contacts.update_error = DuplicateKeyError("gst_number_unique")

    with pytest.raises(ConflictError):
        run(contact_service.update_contact(created["id"], ContactInput.model_validate(valid_contact)))


def test_contact_linked_to_an_account_cannot_be_deleted(fake_db, valid_contact):
    created = run(contact_service.create_contact(ContactInput.model_validate(valid_contact)))
    fake_db.users.documents.append({
        "_id": ObjectId(),
        "email": "orders@sharmatextiles.in",
        "contact_id": ObjectId(created["id"]),
    })

    with pytest.raises(ValidationError) as exc_info:
        run(contact_service.delete_contact(created["id"]))

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Cannot delete contact with associated user account"
    assert len(fake_db.contacts.documents) == 1


def test_unlinked_contact_is_deleted(fake_db, valid_contact):
    created = run(contact_service.create_contact(ContactInput.model_validate(valid_contact)))

    run(contact_service.delete_contact(created["id"]))

    assert fake_db.contacts.documents == []
    with pytest.raises(ResourceNotFoundError):
        run(contact_service.delete_contact(created["id"]))


# ============================================================
# COUPONS
# ============================================================

def coupon(**overrides):
    payload = {
        "code": "diwali10",
        "name": "Diwali",
        "description": "",
        "discountOfferId": "64d000000000000000000001",
        **overrides,
    }
    return coupon_schema.validate(payload).value


@pytest.mark.parametrize("offer_id", ["64d000000000000000000001", "not-an-id"])
def test_coupon_requires_existing_offer(fake_db, offer_id):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        run(discount_service.create_coupon(coupon(discountOfferId=offer_id)))

    assert exc_info.value.message == "Discount offer not found"
    assert fake_db.coupons.documents == []


def test_coupon_code_must_be_unused(fake_db):
    fake_db.discount_offers.documents.append({"_id": ObjectId("64d000000000000000000001"), "name": "Festive"})

    created = run(discount_service.create_coupon(coupon()))
    assert created["code"] == "DIWALI10"
    assert created["discount_offer_id"] == "64d000000000000000000001"
    assert created["usage_count"] == 0

    # Same code in different case
    with pytest.raises(ConflictError):
        run(discount_service.create_coupon(coupon(code="Diwali10")))


# ============================================================
# ACCOUNTS
# ============================================================

def signup(**overrides):
    return SignupInput.model_validate({
        "name": "Ravi Kumar",
        "email": "ravi@example.com",
        "password": "secret1",
        **overrides,
    })


def test_signup_creates_customer_contact_and_account(fake_db):
    user = run(user_service.register_customer(signup()))

    assert user["role"] == "CUSTOMER"
    assert user["name"] == "Ravi Kumar"

    account = fake_db.users.documents[0]
    assert account["password_hash"] != "secret1"
    assert fake_db.contacts.documents[0]["_id"] == account["contact_id"]
    assert fake_db.contacts.documents[0]["type"] == "CUSTOMER"

    authenticated, name = run(user_service.authenticate("ravi@example.com", "secret1"))
    assert authenticated["_id"] == account["_id"]
    assert name == "Ravi Kumar"
    assert run(user_service.authenticate("ravi@example.com", "wrong")) is None


def test_signup_rejects_registered_email(fake_db):
    run(user_service.register_customer(signup()))

    with pytest.raises(ConflictError) as exc_info:
        run(user_service.register_customer(signup(email="Ravi@Example.com")))

    assert exc_info.value.message == "User already exists"
    assert len(fake_db.users.documents) == 1
    assert len(fake_db.contacts.documents) == 1


def test_signup_race_removes_orphan_contact(fake_db):
    fake_db.users.insert_error = DuplicateKeyError("email_unique")

    with pytest.raises(ConflictError):
        run(user_service.register_customer(signup()))

    assert fake_db.contacts.documents == []
