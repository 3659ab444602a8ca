"""
Settings for the remote stores. These are pydantic settings objects, so
any value can be overridden with environment variables, or the whole
object deserialized from a JSON config file.
"""

from pathlib import Path
from typing import Any

import loguru
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """
    Settings shared by all remote stores. Should never be used directly.
    """

    host: str = "localhost"
    "Address of the remote server."
    user: str = "anonymous"
    "Principal to authenticate as."
    url: str = "http://localhost"
    "Public base URL that the remote folder is published under."

    @classmethod
    def from_file(cls, config_path: Path | str):
        """
        Loads the settings from the given path.
        """

        with open(config_path, "r") as handle:
            return cls.model_validate_json(handle.read())


class FTPSettings(StoreSettings):
    """
    Settings for the FTP store.
    """

    port: int = 21
    password: str = ""
    folder: str = "/"
    "Remote folder that all object paths are relative to."
    passive: bool = False
    "Negotiate passive mode for the data connection."
    tls: bool = False
    "Use explicit FTP over TLS. The peer certificate is not verified."
    chmod: bool = True
    "Issue SITE CHMOD with the local file's permissions after upload."

    model_config = SettingsConfigDict(env_prefix="remote_uploads_ftp_", frozen=True)


class SFTPSettings(StoreSettings):
    """
    Settings for the SFTP store.
    """

    options: dict[str, Any] = {}
    "Passed straight through to the SSH connect call (port, password, key_filename, ...)."
    folder: str = ""
    "Remote folder that all object paths are relative to. Empty means the root."
    strict_host_keys: bool = False
    "Load the system known_hosts and reject unknown keys, instead of accepting them."
    download_via_http: bool = False
    "Fetch objects from the public URL rather than over SFTP. Needs the folder to be HTTP-published."

    model_config = SettingsConfigDict(env_prefix="remote_uploads_sftp_", frozen=True)


class LogSettings(BaseModel):
    """
    Settings for the loguru logger. Logging from this package is disabled
    until setup_logs is called with enabled set.
    """

    enabled: bool = False
    level: str = "DEBUG"
    files: dict[Path, str] = {}
    "Egress files for the logger. Rotation (e.g. 500 MB, 1 week) is the string."

    def setup_logs(self):
        if not self.enabled:
            return

        for file_name, rotation in self.files.items():
            loguru.logger.add(
                file_name,
                rotation=rotation,
                level=self.level,
                enqueue=True,
                filter="remote_uploads",
            )

        loguru.logger.enable("remote_uploads")

        return
