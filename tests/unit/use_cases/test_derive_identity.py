from src.app.use_cases.sso import PLACEHOLDER_EMAIL_DOMAIN, derive_identity
from tests.fixtures.json_loader import TestDataLoader


def test_full_claims():
    result = derive_identity(TestDataLoader.get_copy("claims_full"))

    assert result.is_ok()
    identity = result.value
    assert identity.subject == "a1b2c3d4-sap-user"
    assert identity.email == "jane.doe@acme.com"
    assert identity.name == "Jane Doe"


def test_user_id_fallback_and_placeholder_email():
    result = derive_identity(TestDataLoader.get_copy("claims_user_id_only"))

    assert result.is_ok()
    identity = result.value
    assert identity.subject == "P000123"
    assert identity.email == f"P000123@{PLACEHOLDER_EMAIL_DOMAIN}"
    assert identity.email == "P000123@sap.xsuaa"
    assert identity.name == "P000123"


def test_given_name_without_family_name_is_trimmed():
    result = derive_identity(TestDataLoader.get_copy("claims_given_name_only"))

    assert result.value.name == "Cher"


def test_name_falls_back_to_email_local_part():
    result = derive_identity({"sub": "s-1", "email": "max.mustermann@acme.com"})

    assert result.value.name == "max.mustermann"


def test_sub_wins_over_user_id():
    result = derive_identity({"sub": "from-sub", "user_id": "from-user-id"})

    assert result.value.subject == "from-sub"


def test_missing_subject_is_rejected():
    result = derive_identity(TestDataLoader.get_copy("claims_no_subject"))

    assert result.is_err()
    assert result.error.code == "MISSING_SUBJECT"


def test_empty_subject_is_rejected():
    result = derive_identity({"sub": "", "user_id": None, "email": "x@acme.com"})

    assert result.is_err()
    assert result.error.code == "MISSING_SUBJECT"
