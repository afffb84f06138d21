import pytest

from app.schemas.account import login_schema, profile_schema, signup_schema
from app.schemas.discount import coupon_schema, discount_offer_schema
from app.schemas.validation import Valid, ValidationFailure
from utils.constants import DiscountType


@pytest.fixture
def valid_profile():
    return {
        "name": "Ravi Kumar",
        "email": "ravi@example.com",
        "phone": "9876543210",
        "address": "4 Lake View",
        "city": "Pune",
        "state": "Maharashtra",
        "country": "India",
        "pincode": "411001",
    }


def test_signup_requires_only_name_email_password():
    result = signup_schema.validate({"name": "Ravi", "email": "ravi@example.com", "password": "secret"})

    assert isinstance(result, Valid)
    assert result.value.phone == ""


def test_signup_reports_every_bad_field():
    result = signup_schema.validate({"name": "R", "email": "ravi", "password": "123"})

    assert isinstance(result, ValidationFailure)
    assert {error.field: error.message for error in result.errors} == {
        "name": "Name must be at least 2 characters",
        "email": "Invalid email address",
        "password": "Password must be at least 6 characters",
    }


def test_login_requires_a_password():
    result = login_schema.validate({"email": "ravi@example.com", "password": ""})

    assert isinstance(result, ValidationFailure)
    assert result.fields == ["password"]


def test_profile_passes(valid_profile):
    assert isinstance(profile_schema.validate(valid_profile), Valid)


def test_profile_requires_full_address(valid_profile):
    payload = {**valid_profile, "phone": "12345", "city": "", "pincode": "12"}

    result = profile_schema.validate(payload)

    assert isinstance(result, ValidationFailure)
    assert {error.field: error.message for error in result.errors} == {
        "phone": "Phone must be at least 10 digits",
        "city": "City is required",
        "pincode": "Pincode is required",
    }


def test_discount_offer_passes():
    result = discount_offer_schema.validate({
        "name": "Festive Sale",
        "description": "10% off everything",
        "discountType": "PERCENTAGE",
        "discountValue": "10",
        "minOrderAmount": 500,
        "startDate": "2026-10-01",
        "endDate": "2026-10-31",
    })

    assert isinstance(result, Valid)
    offer = result.value
    assert offer.discount_type == DiscountType.PERCENTAGE
    assert offer.discount_value == 10.0
    assert offer.max_discount_amount is None
    assert offer.is_active is True


def test_discount_offer_rejects_negative_amounts():
    result = discount_offer_schema.validate({
        "name": "Broken",
        "description": "",
        "discountType": "FIXED",
        "discountValue": -1,
        "minOrderAmount": -5,
        "startDate": "2026-10-01",
        "endDate": "2026-10-31",
    })

    assert isinstance(result, ValidationFailure)
    assert sorted(result.fields) == ["discountValue", "minOrderAmount"]


def test_coupon_code_is_upper_cased():
    result = coupon_schema.validate({
        "code": "diwali10",
        "name": "Diwali",
        "description": "",
        "discountOfferId": "64d000000000000000000001",
    })

    assert isinstance(result, Valid)
    coupon = result.value
    assert coupon.code == "DIWALI10"
    assert coupon.max_usage_count == 1
    assert coupon.max_usage_per_user == 1
    assert coupon.contact_id is None


def test_coupon_requires_offer_and_long_enough_code():
    result = coupon_schema.validate({"code": "ab", "name": "Diwali", "description": "", "maxUsageCount": 0})

    assert isinstance(result, ValidationFailure)
    assert {error.field: error.message for error in result.errors} == {
        "code": "Code must be at least 3 characters",
        "discountOfferId": "Discount offer is required",
        "maxUsageCount": "Max usage must be at least 1",
    }


def test_signup_password_is_capped_at_72_bytes():
    base = {"name": "Ravi", "email": "ravi@example.com"}

    assert isinstance(signup_schema.validate({**base, "password": "x" * 72}), Valid)

    result = signup_schema.validate({**base, "password": "x" * 80})
    assert isinstance(result, ValidationFailure)
    assert result.to_details() == [{"field": "password", "message": "Password must be at most 72 bytes"}]


def test_signup_password_cap_counts_utf8_bytes():
    # 30 characters, 90 bytes
    result = signup_schema.validate({"name": "Ravi", "email": "ravi@example.com", "password": "₹" * 30})

    assert isinstance(result, ValidationFailure)
    assert result.fields == ["password"]


def test_blank_discount_amounts_count_as_zero():
    result = discount_offer_schema.validate({
        "name": "Flat Sale",
        "description": "",
        "discountType": "FIXED",
        "discountValue": "",
        "minOrderAmount": " ",
        "maxDiscountAmount": "",
        "startDate": "2026-10-01",
        "endDate": "2026-10-31",
    })

    assert isinstance(result, Valid)
    assert result.value.discount_value == 0
    assert result.value.min_order_amount == 0
    assert result.value.max_discount_amount == 0


def test_blank_coupon_usage_counts_fail_minimum():
    result = coupon_schema.validate({
        "code": "FLAT50",
        "name": "Flat",
        "description": "",
        "discountOfferId": "64d000000000000000000001",
        "maxUsageCount": "",
        "maxUsagePerUser": "3",
    })

    assert isinstance(result, ValidationFailure)
    assert result.to_details() == [{"field": "maxUsageCount", "message": "Max usage must be at least 1"}]
