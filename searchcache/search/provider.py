"""
Search provider base class and interface.

Sandi Metz Principles:
- Single Responsibility: Provider abstraction
- Interface Segregation: Minimal provider interface
- Dependency Inversion: Depend on abstraction, not concrete classes
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseSearchProvider(ABC):
    """
    Abstract base class for external search collaborators.

    Defines interface that all providers must implement.
    """

    @abstractmethod
    async def search(self, query: str) -> Any:
        """
        Run search for query.

        Args:
            query: Query text

        Returns:
            Search result payload (JSON-serializable)

        Raises:
            SearchFailedError: If the search fails
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """
        Get provider name.

        Returns:
            Provider name (e.g., "command", "callable")
        """
        pass

    async def close(self) -> None:
        """Release provider resources."""
        return None

    def _build_error_message(self, error: Exception, context: str) -> str:
        """
        Build error message with context.

        Args:
            error: The exception that occurred
            context: Context description

        Returns:
            Formatted error message
        """
        return f"{context}: {type(error).__name__} - {str(error)}"
