"""Test query validator."""

import pytest

from searchcache.exceptions import InvalidQueryError
from searchcache.pipeline.query_validator import QueryValidator


@pytest.fixture
def validator():
    """Create validator with a small length limit."""
    return QueryValidator(max_length=50)


class TestQueryValidator:
    """Test query validator."""

    def test_should_accept_normal_query(self, validator):
        """Test valid query."""
        result = validator.validate("What is Python?")

        assert result.is_valid
        assert not result.has_warnings

    @pytest.mark.parametrize("query", [None, "", "   ", "\n\t"])
    def test_should_reject_missing_or_blank_query(self, validator, query):
        """Test empty queries."""
        assert not validator.is_valid(query)

    def test_should_reject_non_string(self, validator):
        """Test type check."""
        result = validator.validate(42)

        assert result.errors == ["Query must be a string"]

    def test_should_reject_long_query(self, validator):
        """Test length limit."""
        result = validator.validate("x " * 40)

        assert not result.is_valid
        assert "too long" in result.errors[0]

    def test_should_reject_control_characters(self, validator):
        """Test control characters other than whitespace."""
        assert not validator.is_valid("python\x00asyncio")
        assert validator.is_valid("python\tasyncio\n")

    def test_should_warn_on_repetition(self, validator):
        """Test repetition warning keeps query valid."""
        result = validator.validate("helloooooooooooo")

        assert result.is_valid
        assert result.has_warnings

    def test_should_raise_invalid_query_error(self, validator):
        """Test validate_or_raise."""
        with pytest.raises(InvalidQueryError) as exc_info:
            validator.validate_or_raise("   ")

        assert "empty" in str(exc_info.value)
