"""
Search provider factory.

Builds the configured external search collaborator.
"""

from searchcache.config import AppConfig
from searchcache.exceptions import ConfigurationError
from searchcache.search.command_provider import CommandSearchProvider
from searchcache.search.provider import BaseSearchProvider
from searchcache.utils.logger import get_logger

logger = get_logger(__name__)


def create_search_provider(settings: AppConfig) -> BaseSearchProvider:
    """
    Create search provider from configuration.

    Args:
        settings: Application configuration

    Returns:
        Search provider instance

    Raises:
        ConfigurationError: If no search command is configured
    """
    command = settings.search_command_args
    if not command:
        raise ConfigurationError(
            "SEARCH_COMMAND must be set to the search agent command"
        )

    logger.info("Search provider created", provider="command", program=command[0])
    return CommandSearchProvider(command)
