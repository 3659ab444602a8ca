"""
FTP connection manager, built on ftplib. Supports plain FTP and explicit
FTP over TLS.
"""

import ftplib
import posixpath
import ssl

from ..logger import log
from ..settings import FTPSettings
from .core import CoreConnectionManager


def unverified_ssl_context() -> ssl.SSLContext:
    """
    An SSL context that accepts any certificate. Remote FTP servers are
    commonly set up with self-signed certificates.
    """

    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE

    return context


def makedirs(ftp: ftplib.FTP, path: str):
    """
    Create the directory at path and all of its parents, leaving the
    existing ones alone. Relative paths are taken from the current working
    directory, which is restored afterwards.
    """

    if path in ("", ".", "/"):
        return

    start = ftp.pwd()
    current = "/"

    for segment in posixpath.join(start, path).strip("/").split("/"):
        if not segment:
            continue

        current = posixpath.join(current, segment)

        # A missing directory gets a 5xx reply to CWD.
        try:
            ftp.cwd(current)
        except ftplib.error_perm:
            log.debug(f"ftp.mkd({current})")
            ftp.mkd(current)

    ftp.cwd(start)


class FTPConnectionManager(CoreConnectionManager):
    settings: FTPSettings

    def open(self) -> ftplib.FTP:
        if self.settings.tls:
            ftp = ftplib.FTP_TLS(context=unverified_ssl_context())
        else:
            ftp = ftplib.FTP()

        try:
            log.debug(f"Connecting to ftp://{self.settings.host}:{self.settings.port}")
            ftp.connect(self.settings.host, self.settings.port)
            ftp.set_pasv(self.settings.passive)
            ftp.login(self.settings.user, self.settings.password)

            if self.settings.tls:
                ftp.prot_p()
        except BaseException:
            self.close(ftp)
            raise

        return ftp

    def close(self, session: ftplib.FTP):
        # No socket means connect() never succeeded; there is nothing to QUIT.
        if session.sock is not None:
            try:
                session.quit()
            except ftplib.all_errors as e:
                log.debug(f"Ignoring error on FTP QUIT: {e}")

        session.close()
