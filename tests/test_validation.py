"""Tests for input validation functions."""

import pytest

from tablebook.errors import ErrorKind
from tablebook.validation import (
    MISSING_FIELDS,
    validate_credentials,
    validate_password_reset,
    validate_registration,
    validate_reservation,
    validate_review,
    validate_time_slot,
)


class TestRegistrationValidation:
    def test_valid(self):
        result = validate_registration("Asha Rao", "asha@example.com", "secret1")
        assert result.valid
        assert result.error is None

    @pytest.mark.parametrize(
        ("name", "email", "password"),
        [("", "a@example.com", "secret1"), ("Asha", "", "secret1"), ("Asha", "a@example.com", "")],
    )
    def test_missing(self, name, email, password):
        result = validate_registration(name, email, password)
        assert not result.valid
        assert result.error == MISSING_FIELDS
        assert result.kind == ErrorKind.VALIDATION

    def test_name_bounds(self):
        assert not validate_registration("Al", "a@example.com", "secret1").valid
        assert validate_registration("Ali", "a@example.com", "secret1").valid
        assert not validate_registration("x" * 51, "a@example.com", "secret1").valid

    @pytest.mark.parametrize("email", ["plain", "a@b", "a@b.c", "a b@example.com", "@example.com"])
    def test_invalid_email(self, email):
        assert validate_registration("Asha", email, "secret1").error == "Invalid email address"

    def test_password_bounds(self):
        assert not validate_registration("Asha", "a@example.com", "1234").valid
        assert validate_registration("Asha", "a@example.com", "12345").valid
        assert not validate_registration("Asha", "a@example.com", "x" * 129).valid


class TestOtherValidation:
    def test_credentials(self):
        assert validate_credentials("a@example.com", "secret1").valid
        assert validate_credentials("a@example.com", "").error == MISSING_FIELDS

    def test_password_reset(self):
        assert validate_password_reset("token", "secret1").valid
        assert validate_password_reset("", "secret1").error == "Token and new password are required"
        assert not validate_password_reset("token", "abc").valid

    def test_reservation(self):
        assert validate_reservation("2024-06-01", 2).valid
        assert validate_reservation("", 2).error == MISSING_FIELDS
        assert validate_reservation("   ", 2).error == MISSING_FIELDS
        assert validate_reservation("2024-06-01", 0).error == MISSING_FIELDS
        assert validate_reservation("2024-06-01", -1).error == "Guests must be a positive number"

    def test_time_slot(self):
        assert validate_time_slot(19, [18, 19]).valid
        assert validate_time_slot(7, []).valid
        result = validate_time_slot(7, [19, 18])
        assert result.error == "Invalid time slot 7. Available slots: 18, 19"

    def test_review(self):
        assert validate_review(5, "Great").valid
        assert not validate_review(0, "Great").valid
        assert validate_review(3, "").error == MISSING_FIELDS
