"""
FTP and SFTP storage engines for file uploads.

Diagnostics are logged with loguru and are disabled until
remote_uploads.logger.enable_logging() (or LogSettings.setup_logs) is called.
"""

import loguru

from .exceptions import InvalidRemotePathError, NoSuchStoreError
from .sanitized import SanitizedFile
from .settings import FTPSettings, LogSettings, SFTPSettings
from .stores import FTPStore, SFTPStore, Stores, store_from_name
from .uploader import Uploader

loguru.logger.disable("remote_uploads")

__version__ = "1.0.0"

__all__ = [
    "FTPSettings",
    "FTPStore",
    "InvalidRemotePathError",
    "LogSettings",
    "NoSuchStoreError",
    "SFTPSettings",
    "SFTPStore",
    "SanitizedFile",
    "Stores",
    "Uploader",
    "store_from_name",
]
