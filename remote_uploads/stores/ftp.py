"""
A store that keeps objects on an FTP server.
"""

import ftplib
from typing import IO, Optional

from pydantic import Field

from ..connections.ftp import FTPConnectionManager, makedirs
from ..logger import log
from ..sanitized import SanitizedFile
from ..settings import FTPSettings
from ..utils import join_remote_path
from .core import CoreRemoteFile, CoreStore


class FTPFile(CoreRemoteFile):
    settings: FTPSettings

    @property
    def remote_path(self) -> str:
        return join_remote_path(self.settings.folder, self.path)

    @property
    def connection_manager(self) -> FTPConnectionManager:
        return FTPConnectionManager(settings=self.settings)

    def _chdir(self, ftp: ftplib.FTP):
        if self.remote_dirname:
            log.debug(f"ftp.chdir({self.remote_dirname})")
            ftp.cwd(self.remote_dirname)

    def store(self, file: SanitizedFile):
        with self.connection() as ftp:
            log.debug(f"ftp.mkdir_p({self.remote_dirname})")
            makedirs(ftp, self.remote_dirname)
            self._chdir(ftp)

            log.debug(f"ftp.put({file.path}, {self.remote_filename}) {file.size} bytes")
            with open(file.path, "rb") as handle:
                ftp.storbinary(f"STOR {self.remote_filename}", handle)

            if self.settings.chmod:
                self.chmod(ftp, file.permissions)

    def chmod(self, ftp: ftplib.FTP, permissions: int):
        # The session is already in remote_dirname.
        ftp.sendcmd(f"SITE CHMOD {permissions:o} {self.remote_filename}")

    def to_local_copy(self) -> IO[bytes]:
        temp_file = self._temp_file()

        try:
            with self.connection() as ftp:
                self._chdir(ftp)
                ftp.retrbinary(f"RETR {self.remote_filename}", temp_file.write)
        except BaseException:
            temp_file.close()
            raise

        temp_file.seek(0)

        return temp_file

    def size(self) -> Optional[int]:
        with self.connection() as ftp:
            try:
                self._chdir(ftp)
                # SIZE is only well-defined in binary mode.
                ftp.voidcmd("TYPE I")
                return ftp.size(self.remote_filename)
            except ftplib.error_perm as e:
                log.debug(f"Cannot stat {self.remote_path}: {e}")
                return None

    def delete(self):
        try:
            with self.connection() as ftp:
                self._chdir(ftp)
                ftp.delete(self.remote_filename)
        except Exception as e:
            log.debug(f"Ignoring failed delete of {self.remote_path}: {e}")


class FTPStore(CoreStore):
    settings: FTPSettings = Field(default_factory=FTPSettings)

    def remote_file(self, path: str) -> FTPFile:
        return FTPFile(path=path, settings=self.settings)
