"""
Tests for settings validation and log masking.
"""

import logging

import pytest
from pydantic import ValidationError as SettingsValidationError

from claimsdesk.core.config import Settings
from claimsdesk.core.logging import MaskingFormatter, get_logger


class TestSettings:
    """Settings model validation."""

    def test_defaults(self):
        settings = Settings(DATABASE_URL="sqlite://")
        assert settings.MAX_UPLOAD_SIZE_MB == 5
        assert settings.max_upload_bytes == 5 * 1024 * 1024
        assert settings.MAX_DOCUMENTS_PER_CLAIM == 5
        assert settings.MAX_CLAIM_AMOUNT == 50000
        assert "application/pdf" in settings.ALLOWED_CONTENT_TYPES

    @pytest.mark.parametrize("field", [
        "MAX_UPLOAD_SIZE_MB",
        "MAX_DOCUMENTS_PER_CLAIM",
        "MAX_CLAIM_AMOUNT",
        "CLAIM_WINDOW_MONTHS",
    ])
    def test_rejects_non_positive_limits(self, field):
        with pytest.raises(SettingsValidationError):
            Settings(DATABASE_URL="sqlite://", **{field: 0})

    def test_rejects_sqlite_in_production(self):
        with pytest.raises(SettingsValidationError, match="SQLite"):
            Settings(APP_ENV="production", DATABASE_URL="sqlite:///claims.db")

    def test_postgres_in_production(self):
        settings = Settings(
            APP_ENV="production",
            DATABASE_URL="postgresql://hr:secret@db:5432/claims",
        )
        assert settings.APP_ENV == "production"

    def test_debug_outside_development_warns(self):
        with pytest.warns(UserWarning, match="DEBUG"):
            Settings(APP_ENV="staging", DEBUG=True, DATABASE_URL="sqlite://")


class TestLogging:
    """Masking formatter and logger hierarchy."""

    def _format(self, message: str) -> str:
        record = logging.LogRecord("claimsdesk", logging.INFO, __file__, 1, message, None, None)
        return MaskingFormatter("%(message)s").format(record)

    def test_masks_employee_email_field(self):
        formatted = self._format('{"employee_email": "asha.rao@gmail.com", "amount": 10}')
        assert "asha.rao" not in formatted
        assert '"amount": 10' in formatted

    def test_masks_bare_addresses(self):
        formatted = self._format("Claim submitted by ravi@outlook.com")
        assert formatted == "Claim submitted by ***@***"

    def test_child_loggers(self):
        assert get_logger("claimsdesk.services.claim_store").name == "claimsdesk.services.claim_store"
        assert get_logger("tests").name == "claimsdesk.tests"
