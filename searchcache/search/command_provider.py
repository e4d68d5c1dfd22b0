"""
Command-line search agent provider.

Runs an external search agent as a subprocess with the query appended as
its last argument; stdout is the result.
"""

import asyncio
from typing import List, Optional

from searchcache.exceptions import ConfigurationError, SearchFailedError
from searchcache.search.provider import BaseSearchProvider
from searchcache.utils.logger import get_logger

logger = get_logger(__name__)

MAX_STDERR_CHARS = 500


class CommandSearchProvider(BaseSearchProvider):
    """
    Search provider backed by an external command.

    The child process is killed if the awaiting task is cancelled, which is
    how timeouts from TimeoutHandler reach it.
    """

    def __init__(self, command: List[str], env: Optional[dict] = None):
        """
        Initialize provider.

        Args:
            command: Program and leading arguments
            env: Environment for the child process (inherits when None)

        Raises:
            ConfigurationError: If command is empty
        """
        if not command:
            raise ConfigurationError("Search command is not configured")
        self._command = list(command)
        self._env = env

    @property
    def command(self) -> List[str]:
        """Get configured command."""
        return list(self._command)

    async def search(self, query: str) -> str:
        argv = [*self._command, query]
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self._env,
            )
        except OSError as e:
            raise SearchFailedError(
                self._build_error_message(e, "Could not start search command")
            ) from e

        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            await self._kill(process)
            raise

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            logger.error(
                "Search command failed",
                returncode=process.returncode,
                stderr=detail[:MAX_STDERR_CHARS],
            )
            raise SearchFailedError(
                f"Search command exited with status {process.returncode}: "
                f"{detail[:MAX_STDERR_CHARS]}"
            )

        return stdout.decode("utf-8", errors="replace").strip()

    def get_name(self) -> str:
        return "command"

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        process.kill()
        await process.wait()
        logger.warning("Search command killed", pid=process.pid)
