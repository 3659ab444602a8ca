"""
A store that keeps objects on an SSH server, over SFTP.
"""

from typing import IO, Optional

import requests
from pydantic import Field

from ..connections.sftp import SFTPConnectionManager, makedirs
from ..logger import log
from ..sanitized import SanitizedFile
from ..settings import SFTPSettings
from ..utils import join_remote_path
from .core import CoreRemoteFile, CoreStore


class SFTPFile(CoreRemoteFile):
    settings: SFTPSettings

    @property
    def remote_path(self) -> str:
        # An empty folder means the filesystem root, not the login directory.
        return join_remote_path(self.settings.folder or "/", self.path)

    @property
    def connection_manager(self) -> SFTPConnectionManager:
        return SFTPConnectionManager(settings=self.settings)

    def store(self, file: SanitizedFile):
        with self.connection() as sftp:
            log.debug(f"sftp.mkdir_p({self.remote_dirname})")
            makedirs(sftp, self.remote_dirname)

            log.debug(f"sftp.upload({file.path}, {self.remote_path}) {file.size} bytes")
            sftp.put(str(file.path), self.remote_path)

    def to_local_copy(self) -> IO[bytes]:
        temp_file = self._temp_file()

        try:
            if self.settings.download_via_http:
                self._download_via_http(temp_file)
            else:
                with self.connection() as sftp:
                    sftp.getfo(self.remote_path, temp_file)
        except BaseException:
            temp_file.close()
            raise

        temp_file.seek(0)

        return temp_file

    def _download_via_http(self, temp_file: IO[bytes]):
        """
        Fetch the object from its public URL. Only works when the remote
        folder is also served over HTTP at settings.url.
        """

        log.debug(f"GET {self.url()}")

        response = requests.get(self.url(), stream=True)
        response.raise_for_status()

        for chunk in response.iter_content(chunk_size=64 * 1024):
            temp_file.write(chunk)

    def size(self) -> Optional[int]:
        with self.connection() as sftp:
            try:
                return sftp.stat(self.remote_path).st_size
            except FileNotFoundError as e:
                log.debug(f"Cannot stat {self.remote_path}: {e}")
                return None

    def delete(self):
        try:
            with self.connection() as sftp:
                sftp.remove(self.remote_path)
        except Exception as e:
            log.debug(f"Ignoring failed delete of {self.remote_path}: {e}")


class SFTPStore(CoreStore):
    settings: SFTPSettings = Field(default_factory=SFTPSettings)

    def remote_file(self, path: str) -> SFTPFile:
        return SFTPFile(path=path, settings=self.settings)
