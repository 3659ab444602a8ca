"""
SFTP connection manager, built on paramiko.
"""

import posixpath
from contextlib import contextmanager
from typing import Iterator, NamedTuple

import paramiko

from ..logger import log
from ..settings import SFTPSettings
from .core import CoreConnectionManager


def makedirs(sftp: paramiko.SFTPClient, path: str):
    """
    Create the directory at path and all of its parents, leaving the
    existing ones alone.
    """

    if path in ("", ".", "/"):
        return

    current = "/" if path.startswith("/") else ""

    for segment in path.strip("/").split("/"):
        if not segment:
            continue

        current = posixpath.join(current, segment)

        try:
            sftp.stat(current)
        except FileNotFoundError:
            log.debug(f"sftp.mkdir({current})")
            sftp.mkdir(current)


class SFTPSession(NamedTuple):
    """
    An SFTP channel and the SSH client that owns its transport.
    """

    ssh: paramiko.SSHClient
    sftp: paramiko.SFTPClient


class SFTPConnectionManager(CoreConnectionManager):
    settings: SFTPSettings

    def open(self) -> SFTPSession:
        client = paramiko.SSHClient()

        if self.settings.strict_host_keys:
            client.load_system_host_keys()
            client.set_missing_host_key_policy(paramiko.RejectPolicy())
        else:
            client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        try:
            log.debug(f"Connecting to sftp://{self.settings.user}@{self.settings.host}")
            client.connect(
                self.settings.host,
                username=self.settings.user,
                **self.settings.options,
            )
            sftp = client.open_sftp()
        except BaseException:
            client.close()
            raise

        return SFTPSession(ssh=client, sftp=sftp)

    def close(self, session: SFTPSession):
        for closeable in (session.sftp, session.ssh):
            try:
                closeable.close()
            except (paramiko.SSHException, OSError, EOFError) as e:
                log.debug(f"Ignoring error on SFTP close: {e}")

    @contextmanager
    def connection(self) -> Iterator[paramiko.SFTPClient]:
        """
        Yield a live SFTP channel, closing it and its SSH client afterwards.
        """

        with super().connection() as session:
            yield session.sftp
