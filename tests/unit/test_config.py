"""Settings validation tests."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def make_settings(**overrides) -> Settings:
    values = {"secret_key": "unit-test-secret", "storage_backend": "local"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_defaults() -> None:
    settings = make_settings()
    assert settings.access_token_expire_minutes == 60 * 24 * 7
    assert settings.allowed_image_types_list == ["image/jpeg", "image/png", "image/jpg"]


def test_secret_key_required() -> None:
    with pytest.raises(ValidationError, match="SECRET_KEY is required"):
        make_settings(secret_key="")


def test_unknown_storage_backend() -> None:
    with pytest.raises(ValidationError, match="Invalid storage_backend"):
        make_settings(storage_backend="ftp")


def test_s3_requires_bucket() -> None:
    with pytest.raises(ValidationError, match="s3_bucket is required"):
        make_settings(storage_backend="s3", s3_bucket=None)


def test_report_locale_must_be_supported() -> None:
    assert make_settings(report_locale="tr").report_locale == "tr"
    with pytest.raises(ValidationError, match="report_locale"):
        make_settings(report_locale="fr")


def test_avatar_cap_within_upload_cap() -> None:
    with pytest.raises(ValidationError, match="MAX_AVATAR_SIZE"):
        make_settings(max_upload_size=1024, max_avatar_size=2048)


def test_firestore_configured() -> None:
    assert not make_settings(
        firebase_service_account_key=None, firebase_service_account_path=None
    ).firestore_configured
    assert make_settings(firebase_service_account_path="/secrets/sa.json").firestore_configured


def test_csv_lists_strip_blanks() -> None:
    settings = make_settings(allowed_origins=" https://a.example , ,https://b.example")
    assert settings.allowed_origins_list == ["https://a.example", "https://b.example"]
