"""
Persistent analytics recorder.

Stores lookup records as JSON lines so that separate processes (the API
server and the CLI) share one history.
"""

import asyncio
import os
from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from searchcache.analytics.recorder import AnalyticsRecorder
from searchcache.cache.base import Clock
from searchcache.models.analytics import AnalyticsRecord
from searchcache.utils.logger import get_logger, log_error

logger = get_logger(__name__)

# (size, mtime_ns) of the log; None when the file does not exist
FileSignature = Optional[Tuple[int, int]]


class FileAnalyticsRecorder(AnalyticsRecorder):
    """
    Analytics recorder persisted to a JSON-lines file.

    History is reloaded whenever the file changed since this instance last
    read or wrote it, so appends and resets made by another process are
    picked up. Disk failures are logged and the in-memory view keeps
    working, so analytics never fail a lookup.
    """

    def __init__(
        self,
        path: Union[str, Path],
        max_records: int = 10000,
        top_queries_limit: int = 10,
        clock: Optional[Clock] = None,
    ):
        super().__init__(
            max_records=max_records,
            top_queries_limit=top_queries_limit,
            clock=clock,
        )
        self._path = Path(path)
        self._loaded = False
        self._signature: FileSignature = None
        self._lines_on_disk = 0

    @property
    def path(self) -> Path:
        """Get analytics log path."""
        return self._path

    async def _ensure_loaded(self) -> None:
        try:
            signature = await asyncio.to_thread(_file_signature, self._path)
            if self._loaded and signature == self._signature:
                return
            lines = await asyncio.to_thread(_read_lines, self._path)
        except OSError as e:
            log_error(e, "analytics_load", path=str(self._path))
            return

        self._records.clear()
        skipped = 0
        for line in lines:
            try:
                self._records.append(AnalyticsRecord.model_validate_json(line))
            except PydanticValidationError:
                skipped += 1

        self._loaded = True
        self._signature = signature
        self._lines_on_disk = len(lines)
        if skipped:
            logger.warning("Skipped corrupt analytics lines", count=skipped)
        logger.debug("Analytics loaded", path=str(self._path), count=len(self._records))

    async def _append(self, record: AnalyticsRecord) -> None:
        # Compact once the log holds twice the retained history. The records
        # were just reloaded from disk, so they include other writers' lines.
        if self._lines_on_disk + 1 > 2 * self._max_records:
            await self._rewrite([r.model_dump_json() for r in self._records])
            return

        try:
            self._signature = await asyncio.to_thread(
                _append_line, self._path, record.model_dump_json()
            )
            self._lines_on_disk += 1
        except OSError as e:
            log_error(e, "analytics_append", path=str(self._path))

    async def _truncate(self) -> None:
        await self._rewrite([])

    async def _rewrite(self, lines: List[str]) -> None:
        try:
            self._signature = await asyncio.to_thread(_write_lines, self._path, lines)
            self._lines_on_disk = len(lines)
        except OSError as e:
            log_error(e, "analytics_rewrite", path=str(self._path))


def _file_signature(path: Path) -> FileSignature:
    try:
        stat = path.stat()
    except FileNotFoundError:
        return None
    return stat.st_size, stat.st_mtime_ns


def _read_lines(path: Path) -> List[str]:
    # Undecodable bytes become U+FFFD and the line fails validation.
    try:
        with path.open("r", encoding="utf-8", errors="replace") as handle:
            return [line for line in (raw.strip() for raw in handle) if line]
    except FileNotFoundError:
        return []


def _append_line(path: Path, line: str) -> FileSignature:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(line + "\n")
    return _file_signature(path)


def _write_lines(path: Path, lines: List[str]) -> FileSignature:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    with tmp_path.open("w", encoding="utf-8") as handle:
        handle.writelines(line + "\n" for line in lines)
    os.replace(tmp_path, path)
    return _file_signature(path)
