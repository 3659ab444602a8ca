"""
Shared fixtures amongst all tests.

No remote host is ever contacted: ftplib.FTP/FTP_TLS and paramiko.SSHClient
are replaced by fakes that serve a directory under tmp_path.
"""

import errno
import ftplib
import os
import posixpath
import random
from pathlib import Path
from types import SimpleNamespace

import paramiko
import pytest

from remote_uploads import FTPSettings, SanitizedFile, SFTPSettings, Uploader
from remote_uploads.stores import FTPStore, SFTPStore


class FakeServer:
    """
    State shared by all sessions opened against one fake host.
    """

    def __init__(self, root: Path):
        self.root = root
        self.sessions = []
        self.fail_on_close = False

    def local(self, path: str) -> Path:
        return self.root / path.lstrip("/")


class FakeFTP:
    def __init__(self, server: FakeServer, tls: bool = False, context=None):
        self.server = server
        self.tls = tls
        self.context = context
        self.cwd_path = "/"
        self.passive = True
        self.protected = False
        self.logged_in = False
        self.closed = False
        self.commands = []
        self.sock = None
        self.chmod_targets = []

        server.sessions.append(self)

    def _resolve(self, path: str) -> str:
        return posixpath.normpath(posixpath.join(self.cwd_path, path))

    def connect(self, host, port):
        if host == "unreachable":
            raise ConnectionRefusedError(errno.ECONNREFUSED, "Connection refused")

        self.host = host
        self.port = port
        self.sock = object()

        return "220 Welcome"

    def set_pasv(self, value):
        self.passive = value

    def login(self, user, passwd):
        if passwd == "wrong":
            raise ftplib.error_perm("530 Login incorrect.")

        self.user = user
        self.logged_in = True

        return "230 Logged in"

    def prot_p(self):
        self.protected = True

    def pwd(self):
        return self.cwd_path

    def cwd(self, path):
        resolved = self._resolve(path)

        if not self.server.local(resolved).is_dir():
            raise ftplib.error_perm(f"550 {path}: No such file or directory")

        self.cwd_path = resolved

    def mkd(self, path):
        local = self.server.local(self._resolve(path))

        if local.exists() or not local.parent.is_dir():
            raise ftplib.error_perm(f"550 {path}: Cannot create directory")

        local.mkdir()
        self.commands.append(f"MKD {path}")

        return path

    def storbinary(self, cmd, fp):
        name = cmd.split(" ", 1)[1]
        self.server.local(self._resolve(name)).write_bytes(fp.read())
        self.commands.append(cmd)

        return "226 Transfer complete"

    def retrbinary(self, cmd, callback):
        local = self.server.local(self._resolve(cmd.split(" ", 1)[1]))

        if not local.is_file():
            raise ftplib.error_perm("550 No such file")

        data = local.read_bytes()

        for start in range(0, len(data), 7):
            callback(data[start : start + 7])

        return "226 Transfer complete"

    def voidcmd(self, cmd):
        self.commands.append(cmd)

        return "200 OK"

    def sendcmd(self, cmd):
        if cmd.startswith("SITE CHMOD "):
            target = cmd.split(" ", 3)[3]

            if not self.server.local(self._resolve(target)).is_file():
                raise ftplib.error_perm(f"550 {target}: No such file or directory")

            self.chmod_targets.append(self._resolve(target))

        self.commands.append(cmd)

        return "200 OK"

    def size(self, name):
        local = self.server.local(self._resolve(name))

        if not local.is_file():
            raise ftplib.error_perm("550 Could not get file size.")

        return local.stat().st_size

    def delete(self, name):
        local = self.server.local(self._resolve(name))

        if not local.is_file():
            raise ftplib.error_perm("550 No such file")

        local.unlink()

        return "250 Deleted"

    def quit(self):
        if self.sock is None:
            raise AttributeError("'NoneType' object has no attribute 'sendall'")

        if self.server.fail_on_close:
            raise EOFError()

        self.close()

        return "221 Goodbye"

    def close(self):
        self.sock = None
        self.closed = True


class FakeSFTPClient:
    def __init__(self, server: FakeServer):
        self.server = server
        self.closed = False

    def stat(self, path):
        local = self.server.local(path)

        if not local.exists():
            raise FileNotFoundError(errno.ENOENT, "No such file")

        return SimpleNamespace(st_size=local.stat().st_size)

    def mkdir(self, path):
        local = self.server.local(path)

        if local.exists():
            raise OSError("Failure")

        local.mkdir()

    def put(self, localpath, remotepath):
        self.server.local(remotepath).write_bytes(Path(localpath).read_bytes())

    def getfo(self, remotepath, fl):
        local = self.server.local(remotepath)

        if not local.is_file():
            raise FileNotFoundError(errno.ENOENT, "No such file")

        fl.write(local.read_bytes())

    def remove(self, path):
        local = self.server.local(path)

        if not local.is_file():
            raise FileNotFoundError(errno.ENOENT, "No such file")

        local.unlink()

    def close(self):
        if self.server.fail_on_close:
            raise EOFError()

        self.closed = True


class FakeSSHClient:
    def __init__(self, server: FakeServer):
        self.server = server
        self.policy = None
        self.system_host_keys = False
        self.closed = False
        self.sftp = None

        server.sessions.append(self)

    def set_missing_host_key_policy(self, policy):
        self.policy = policy

    def load_system_host_keys(self):
        self.system_host_keys = True

    def connect(self, hostname, username=None, **options):
        if options.get("password") == "wrong":
            raise paramiko.AuthenticationException("Authentication failed.")

        self.hostname = hostname
        self.username = username
        self.options = options

    def open_sftp(self):
        self.sftp = FakeSFTPClient(self.server)

        return self.sftp

    def close(self):
        self.closed = True


@pytest.fixture
def ftp_server(tmp_path, monkeypatch) -> FakeServer:
    """
    A fake FTP server; every ftplib.FTP/FTP_TLS created talks to it.
    """

    root = tmp_path / "ftp_root"
    root.mkdir()

    server = FakeServer(root)

    monkeypatch.setattr(ftplib, "FTP", lambda *a, **kw: FakeFTP(server, **kw))
    monkeypatch.setattr(
        ftplib, "FTP_TLS", lambda *a, **kw: FakeFTP(server, tls=True, **kw)
    )

    return server


@pytest.fixture
def sftp_server(tmp_path, monkeypatch) -> FakeServer:
    """
    A fake SSH server; every paramiko.SSHClient created talks to it.
    """

    root = tmp_path / "sftp_root"
    root.mkdir()

    server = FakeServer(root)

    monkeypatch.setattr(paramiko, "SSHClient", lambda: FakeSSHClient(server))

    return server


@pytest.fixture
def uploader(tmp_path) -> Uploader:
    root = tmp_path / "public"
    root.mkdir()

    return Uploader(root=root, store_dir="photos/123", filename="avatar.png")


@pytest.fixture
def garbage_file(tmp_path) -> SanitizedFile:
    """
    Returns a file filled with garbage.
    """

    data = random.randbytes(1024)

    path = tmp_path / "garbage_file.png"

    with open(path, "wb") as handle:
        handle.write(data)

    os.chmod(path, 0o644)

    yield SanitizedFile(path=path)

    # Delete the file for good measure.
    try:
        path.unlink()
    except FileNotFoundError:
        pass


@pytest.fixture
def ftp_store(ftp_server, uploader) -> FTPStore:
    return FTPStore(uploader=uploader, settings=FTPSettings(folder="/uploads"))


@pytest.fixture
def sftp_store(sftp_server, uploader) -> SFTPStore:
    return SFTPStore(
        uploader=uploader,
        settings=SFTPSettings(folder="/uploads", options={"port": 2222}),
    )
