"""
Useful utilities for paths and cache entries.
"""

import itertools
import os
import posixpath
import random
import re
import time
from pathlib import Path

from .exceptions import InvalidRemotePathError

# Cache ids are formatted TIMEINT-PID-COUNTER-RND. The leading timestamp is
# what lets independent processes prune each other's stale entries.
CACHE_ID_PATTERN = re.compile(r"^(\d+)-\d+-\d+(?:-\d+)?")

_cache_counter = itertools.count(1)


def generate_cache_id() -> str:
    """
    Generate a unique cache id, embedding the current time, the process id,
    a per-process counter and a random number.
    """

    counter = next(_cache_counter) % 10000

    return f"{int(time.time())}-{os.getpid()}-{counter:04d}-{random.randint(0, 9999):04d}"


def get_timestamp_from_cache_name(name: str) -> int | None:
    """
    Get the creation time embedded in a cache entry name, or None if the
    name was not produced by generate_cache_id.
    """

    matched = CACHE_ID_PATTERN.match(name)

    if matched is None:
        return None

    return int(matched.group(1))


def join_remote_path(folder: str, path: str) -> str:
    """
    Join the configured remote folder with a relative object path, always
    using forward slashes.

    Parameters
    ----------
    folder : str
        The remote folder. May be empty, in which case the path is returned
        relative to the login directory.
    path : str
        Relative path of the object under the folder.

    Raises
    ------
    InvalidRemotePathError
        If the path is empty or resolves outside the folder.
    """

    relative = posixpath.normpath(str(path).replace("\\", "/").strip("/"))

    if relative in ("", "."):
        raise InvalidRemotePathError(path, "object paths must not be empty")

    # Someone could pass us ../../../../etc/passwd or something.
    if relative == ".." or relative.startswith("../"):
        raise InvalidRemotePathError(path, "resolves outside the remote folder")

    if not folder:
        return relative

    folder = folder.replace("\\", "/").rstrip("/")

    return f"{folder}/{relative}"


def get_type_from_path(path):
    """Get the "file type" from a path.

    This is just the last bit of text following the last ".", by definition.

    """
    return str(path).split(".")[-1]


def get_size_from_path(path) -> int:
    """Get the number of bytes occupied by the flat file at `path`."""
    return os.path.getsize(Path(path))
