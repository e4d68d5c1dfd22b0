"""
Query Validator Service.

Validates search queries before any cache or search interaction.

Sandi Metz Principles:
- Single Responsibility: Query validation
- Small methods: Each validation isolated
- Clear errors: Descriptive validation messages
"""

import unicodedata
from dataclasses import dataclass
from typing import List, Optional

from searchcache.exceptions import InvalidQueryError
from searchcache.utils.logger import get_logger

logger = get_logger(__name__)

# Whitespace control characters that may legitimately appear in a query
ALLOWED_CONTROL_CHARS = {"\t", "\n", "\r"}


@dataclass
class ValidationResult:
    """Result of query validation."""

    is_valid: bool
    errors: List[str]
    warnings: List[str]

    @property
    def has_warnings(self) -> bool:
        """Check if validation has warnings."""
        return len(self.warnings) > 0

    @classmethod
    def success(cls, warnings: Optional[List[str]] = None) -> "ValidationResult":
        """Create successful validation result."""
        return cls(is_valid=True, errors=[], warnings=warnings or [])

    @classmethod
    def failure(cls, errors: List[str]) -> "ValidationResult":
        """Create failed validation result."""
        return cls(is_valid=False, errors=errors, warnings=[])


class QueryValidator:
    """
    Validates queries meet processing requirements.

    Rejects missing, blank, over-long and control-character queries.
    """

    DEFAULT_MAX_LENGTH = 2000

    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH):
        """
        Initialize validator with constraints.

        Args:
            max_length: Maximum query length
        """
        self._max_length = max_length

    def validate(self, query: Optional[str]) -> ValidationResult:
        """
        Validate a query string.

        Args:
            query: Query to validate

        Returns:
            ValidationResult with status and messages
        """
        if query is None:
            return ValidationResult.failure(["Query cannot be None"])

        if not isinstance(query, str):
            return ValidationResult.failure(["Query must be a string"])

        if not query.strip():
            return ValidationResult.failure(["Query cannot be empty"])

        errors: List[str] = []
        warnings: List[str] = []

        if len(query) > self._max_length:
            errors.append(f"Query too long (max {self._max_length} chars)")

        if self._has_control_characters(query):
            errors.append("Query contains control characters")

        if self._has_excessive_repetition(query):
            warnings.append("Query contains excessive repetition")

        if errors:
            logger.warning("Query validation failed", errors=errors)
            return ValidationResult.failure(errors)

        if warnings:
            logger.info("Query validation passed with warnings", warnings=warnings)

        return ValidationResult.success(warnings)

    def validate_or_raise(self, query: Optional[str]) -> None:
        """
        Validate query and raise exception on failure.

        Args:
            query: Query to validate

        Raises:
            InvalidQueryError: If validation fails
        """
        result = self.validate(query)
        if not result.is_valid:
            raise InvalidQueryError("; ".join(result.errors))

    def is_valid(self, query: Optional[str]) -> bool:
        """Quick check if query is valid."""
        return self.validate(query).is_valid

    @staticmethod
    def _has_control_characters(text: str) -> bool:
        return any(
            unicodedata.category(ch) == "Cc" and ch not in ALLOWED_CONTROL_CHARS
            for ch in text
        )

    @staticmethod
    def _has_excessive_repetition(text: str, threshold: int = 10) -> bool:
        """
        Check for excessive character repetition.

        Args:
            text: Input text
            threshold: Max allowed consecutive repeats

        Returns:
            True if excessive repetition found
        """
        count = 1
        for i in range(1, len(text)):
            if text[i] == text[i - 1] and not text[i].isspace():
                count += 1
                if count >= threshold:
                    return True
            else:
                count = 1
        return False
