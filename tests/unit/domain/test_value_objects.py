"""Unit tests for Email and DtiNumber."""

import pytest

from vfire.domain import DtiNumber, Email, ValidationError


class TestEmail:

    def test_normalized_to_lowercase(self):
        assert Email("  Owner@Example.COM ").value == "owner@example.com"

    def test_equal_after_normalization(self):
        assert Email("owner@example.com") == Email("OWNER@Example.com ")
        assert str(Email("Inspector@BFP.gov.ph")) == "inspector@bfp.gov.ph"

    @pytest.mark.parametrize("value", ["", "   ", "no-at-sign", "a@b", "a b@example.com"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            Email(value)


class TestDtiNumber:

    def test_spacing_and_case_normalized(self):
        assert DtiNumber("dti-123 456") == DtiNumber("DTI-123456")

    def test_required(self):
        with pytest.raises(ValidationError) as exc:
            DtiNumber("   ")
        assert exc.value.field == "dti_certificate_no"

    def test_max_length(self):
        with pytest.raises(ValidationError):
            DtiNumber("X" * (DtiNumber.MAX_LENGTH + 1))
