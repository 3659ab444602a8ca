"""
The local disk cache that incoming files are staged in before they are
sent to a remote store.
"""

import errno
import os
import shutil
import time
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, PrivateAttr

from ..logger import log
from ..sanitized import SanitizedFile
from ..uploader import Uploader
from ..utils import get_timestamp_from_cache_name

EXHAUSTION_ERRNOS = (errno.EMLINK, errno.ENOSPC)

STALE_CACHE_SECONDS = 600


class LocalCache(BaseModel):
    uploader: Uploader

    _purged: bool = PrivateAttr(default=False)

    def _expand(self, path: str | Path) -> Path:
        return Path(self.uploader.root) / path

    def cache(self, new_file: SanitizedFile) -> SanitizedFile:
        """
        Move a file into the cache directory, replacing any existing entry
        with the same name.

        If the filesystem runs out of links or space, entries older than ten
        minutes are purged and the move retried. This happens at most once
        for the lifetime of the cache; the second time the error is raised.
        """

        if self.uploader.filename:
            destination = self._expand(self.uploader.cache_path())
        else:
            destination = self._expand(
                self.uploader.cache_path(f"{self.uploader.cache_id}/{new_file.filename}")
            )

        try:
            return new_file.move_to(
                destination,
                self.uploader.permissions,
                self.uploader.directory_permissions,
                overwrite=True,
            )
        except OSError as e:
            if e.errno not in EXHAUSTION_ERRNOS or self._purged:
                raise

            self._purged = True

            log.warning(
                f"Cache write to {destination} failed ({e}), purging stale entries and retrying."
            )

            self.cleanup_older_than(STALE_CACHE_SECONDS)

            return self.cache(new_file)

    def retrieve(self, identifier: str) -> SanitizedFile:
        return SanitizedFile(path=self._expand(self.uploader.cache_path(identifier)))

    def cleanup_older_than(self, seconds: int) -> int:
        """
        Remove all cache entries created more than `seconds` ago.

        Entries whose names do not start with a cache id timestamp are left
        alone. Removal errors are ignored, as other processes may be
        cleaning up the same directory.

        Returns
        -------
        int
            Number of entries removed.
        """

        cache_root = self._expand(self.uploader.cache_dir)

        if not cache_root.is_dir():
            return 0

        cutoff = time.time() - seconds
        removed = 0

        for entry in cache_root.iterdir():
            timestamp = get_timestamp_from_cache_name(entry.name)

            if timestamp is None or timestamp >= cutoff:
                continue

            log.debug(f"Removing stale cache entry {entry}")

            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry, ignore_errors=True)
            else:
                try:
                    entry.unlink()
                except OSError as e:
                    log.debug(f"Could not remove {entry}: {e}")
                    continue

            removed += 1

        return removed

    def delete_dir(self, path: Optional[str]):
        """
        Remove a cache directory if it is empty. Missing paths, non-directories
        and non-empty directories are left as they are.
        """

        if not path:
            return

        try:
            os.rmdir(self._expand(path))
        except (FileNotFoundError, NotADirectoryError):
            pass
        except OSError as e:
            if e.errno not in (errno.ENOTEMPTY, errno.EEXIST):
                raise

            log.debug(f"Not removing non-empty cache directory {path}")
