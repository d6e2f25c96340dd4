"""Background ingestion of files dropped into the imports directory.

This module provides the ImportWatcher class, which periodically scans the
inbound directory and drives every new file through hashing, the raw store,
the transcoder and finally the metadata store.

Inbound files are consumed: each one is deleted once it has been recorded,
recognised as a duplicate, or rejected as undecodable. Files without a
usable extension are left in place, as are files whose record could not be
written, so that the next cycle retries them.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from picvoter.core.context import AppContext
from picvoter.core.errors import DecodeError, StoreError
from picvoter.repositories.image_repo import ImageRepository
from picvoter.services.raw_store import AdmitResult, RawStore
from picvoter.services.transcoder import Transcoder
from picvoter.utils.hash import content_hash_text

# Configure logger for this module
logger = logging.getLogger(__name__)


@dataclass
class CycleReport:
    """Per-cycle tally of what happened to each inbound file."""

    inserted: list[str] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def display_name(path: Path) -> str:
    """Return the basename as valid text, whatever bytes the filesystem holds.

    Undecodable bytes become U+FFFD instead of lone surrogates, which database
    drivers refuse to encode.
    """
    return os.fsencode(path.name).decode("utf-8", "replace")


def iter_import_files(root: Path, *, recursive: bool) -> Iterator[Path]:
    """Yield regular files below ``root`` in name order.

    Subdirectories are walked with an explicit stack, never by recursion.
    Hidden entries (dot files, including in-progress temporaries) are ignored.

    Raises:
        OSError: If ``root`` itself cannot be listed.
    """
    pending = [root]
    while pending:
        directory = pending.pop()
        try:
            entries = sorted(directory.iterdir())
        except OSError:
            if directory == root:
                raise
            logger.warning("Cannot list %s, skipping", directory, exc_info=True)
            continue

        subdirs: list[Path] = []
        for entry in entries:
            if entry.name.startswith("."):
                continue
            if entry.is_dir() and not entry.is_symlink():
                if recursive:
                    subdirs.append(entry)
            elif entry.is_file():
                yield entry
        # Reverse so subdirectories pop in name order.
        pending.extend(reversed(subdirs))


class ImportWatcher:
    """Periodically ingests new files from the imports directory.

    The loop runs until stopped. Each cycle executes in a worker thread and
    finishes before the next sleep, so cycles never overlap. Errors never end
    the loop; a failing cycle is logged and retried after one interval.
    """

    def __init__(self, context: AppContext) -> None:
        """Initialize the watcher.

        Args:
            context: Application context supplying settings and sessions.
        """
        self.context = context
        settings = context.settings
        self.imports_dir = settings.imports_dir
        self.raw_store = RawStore(settings.raws_dir)
        self.transcoder = Transcoder(
            settings.resized_dir,
            size=settings.rendition_size,
            quality=settings.jpeg_quality,
        )
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    async def start(self) -> None:
        """Start the background import loop."""
        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the background import loop after the current cycle."""
        if self._task is None:
            return

        self._stopping.set()
        await self._task
        self._task = None

    async def _run(self) -> None:
        interval = max(0.1, float(self.context.settings.import_interval_seconds))

        while not self._stopping.is_set():
            logger.info("Checking for new imports...")
            try:
                report = await asyncio.to_thread(self.run_cycle)
            except (OSError, StoreError) as e:
                logger.error("Failed to check imports: %s", e)
            except Exception:
                logger.exception("Unexpected error while checking imports")
            else:
                logger.info(
                    "Imports check complete: %d inserted, %d duplicate, %d skipped, %d failed",
                    len(report.inserted),
                    len(report.duplicates),
                    len(report.skipped),
                    len(report.failed),
                )

            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=interval)
            except asyncio.TimeoutError:
                pass

    def run_cycle(self) -> CycleReport:
        """Scan the imports directory once and ingest what is found.

        Raises:
            OSError: If the imports directory cannot be listed.
            StoreError: If the metadata store fails; the rest of the cycle is
                abandoned.
        """
        report = CycleReport()
        recursive = self.context.settings.import_recursive

        for path in iter_import_files(self.imports_dir, recursive=recursive):
            try:
                self._ingest_file(path, report)
            except (OSError, DecodeError) as e:
                logger.error("Failed to import %s: %s", path, e)
                report.failed.append(path.name)
        return report

    def _accepted_extension(self, path: Path) -> str | None:
        ext = path.suffix.lower().lstrip(".")
        if not ext:
            logger.warning("No extension found for file %s", path)
            return None

        allowed = self.context.settings.import_extensions
        if allowed and ext not in allowed:
            logger.warning("Unsupported extension %r for file %s", ext, path)
            return None
        return ext

    def _ingest_file(self, path: Path, report: CycleReport) -> None:
        ext = self._accepted_extension(path)
        if ext is None:
            report.skipped.append(path.name)
            return

        data = path.read_bytes()
        file_hash = content_hash_text(data)
        logger.info("Found new file: %s with hash %s", path, file_hash)

        # The metadata store is authoritative; the raw copy is restored if it went missing.
        if self._is_recorded(file_hash):
            self.raw_store.admit(data, file_hash, ext)
            logger.info("File %s is already recorded (hash %s), removing", path, file_hash)
            path.unlink()
            report.duplicates.append(path.name)
            return

        if self.raw_store.admit(data, file_hash, ext) is AdmitResult.DUPLICATE:
            logger.info("File %s was already imported (hash %s), removing", path, file_hash)
            path.unlink()
            report.duplicates.append(path.name)
            return

        raw_path = self.raw_store.raw_path(file_hash, ext)
        try:
            self.transcoder.write(file_hash, raw_path)
        except DecodeError:
            self.raw_store.evict(file_hash, ext)
            path.unlink()
            raise
        except BaseException:
            self.raw_store.evict(file_hash, ext)
            raise

        try:
            self._record(display_name(path), file_hash)
        except BaseException:
            # Nothing may outlive a missing record, or the next cycle sees a duplicate.
            self.transcoder.remove(file_hash)
            self.raw_store.evict(file_hash, ext)
            raise

        path.unlink()
        report.inserted.append(path.name)
        logger.info("Imported %s as %s.%s", path.name, file_hash, ext)

    def _is_recorded(self, file_hash: str) -> bool:
        with self.context.session_factory() as db:
            try:
                return ImageRepository(db).get_by_hash(file_hash) is not None
            except SQLAlchemyError as exc:
                raise StoreError(f"Failed to look up hash {file_hash}") from exc

    def _record(self, filename: str, file_hash: str) -> None:
        with self.context.session_factory() as db:
            try:
                ImageRepository(db).create(filename=filename, content_hash=file_hash)
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                raise StoreError(f"Failed to record {filename} ({file_hash})") from exc
