"""
Core store and remote file (prototypes).
"""

import abc
import posixpath
import tempfile
from typing import IO, Optional

from pydantic import BaseModel, PrivateAttr

from ..connections.core import CoreConnectionManager
from ..sanitized import SanitizedFile
from ..settings import StoreSettings
from ..uploader import Uploader
from .cache import LocalCache


class CoreRemoteFile(BaseModel, abc.ABC):
    """
    Prototype for a handle on one object on a remote store. Handles are
    cheap: they hold a path and the settings, nothing else, and open a new
    connection for every operation that needs the network.
    """

    path: str
    "Path of the object relative to the remote folder."
    settings: StoreSettings

    _content_type: Optional[str] = PrivateAttr(default=None)

    def model_post_init(__context, *args, **kwargs):
        # Fail early on paths that can never be valid.
        __context.remote_path

    @property
    @abc.abstractmethod
    def remote_path(self) -> str:
        """
        Full path of the object on the remote host.
        """
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def connection_manager(self) -> CoreConnectionManager:
        raise NotImplementedError

    @property
    def remote_dirname(self) -> str:
        return posixpath.dirname(self.remote_path)

    @property
    def remote_filename(self) -> str:
        return posixpath.basename(self.remote_path)

    def connection(self):
        return self.connection_manager.connection()

    def _temp_file(self) -> IO[bytes]:
        """
        A binary temporary file, carrying the object's extension.
        """

        extension = SanitizedFile(path=self.path).extension

        return tempfile.TemporaryFile(suffix=f".{extension}" if extension else "")

    @abc.abstractmethod
    def store(self, file: SanitizedFile):
        """
        Upload a local file to this path, creating any missing remote
        directories. Overwrites whatever was there before.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def to_local_copy(self) -> IO[bytes]:
        """
        Download the object into a temporary file, rewound to the start.
        The caller is responsible for closing it.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def size(self) -> Optional[int]:
        """
        Size of the object in bytes, or None if it cannot be statted.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self):
        """
        Remove the object. Never raises.
        """
        raise NotImplementedError

    def exists(self) -> bool:
        return self.size() is not None

    def read(self) -> bytes:
        with self.to_local_copy() as handle:
            return handle.read()

    def url(self) -> str:
        return f"{self.settings.url.rstrip('/')}/{self.path.lstrip('/')}"

    def filename(self) -> str:
        return self.url().rsplit("/", 1)[-1]

    @property
    def content_type(self) -> str:
        if self._content_type is not None:
            return self._content_type

        return SanitizedFile(path=self.path).content_type

    @content_type.setter
    def content_type(self, value: Optional[str]):
        self._content_type = value


class CoreStore(BaseModel, abc.ABC):
    """
    Prototype for a storage engine. Should never be used directly (other
    than for type hints!). Derived classes provide the remote file type;
    everything to do with the local cache is handled here, by a LocalCache
    owned by each store instance.
    """

    uploader: Uploader

    _cache: LocalCache = PrivateAttr()

    def model_post_init(__context, *args, **kwargs):
        __context._cache = LocalCache(uploader=__context.uploader)

    @abc.abstractmethod
    def remote_file(self, path: str) -> CoreRemoteFile:
        """
        Build a handle for the object at path (relative to the remote
        folder). No network traffic.
        """
        raise NotImplementedError

    def store(self, file: SanitizedFile) -> CoreRemoteFile:
        """
        Upload a file to the uploader's store path.

        Returns
        -------
        CoreRemoteFile
            Handle on the stored object.
        """

        identifier = None if self.uploader.filename else file.filename

        remote_file = self.remote_file(self.uploader.store_path(identifier))
        remote_file.store(file)

        return remote_file

    def retrieve(self, identifier: str) -> CoreRemoteFile:
        """
        Handle on a previously stored object. Nothing is transferred until
        an operation is called on the handle.
        """

        return self.remote_file(self.uploader.store_path(identifier))

    def cache_to_local(self, new_file: SanitizedFile) -> SanitizedFile:
        return self._cache.cache(new_file)

    def retrieve_from_cache(self, identifier: str) -> SanitizedFile:
        return self._cache.retrieve(identifier)

    def cleanup_older_than(self, seconds: int) -> int:
        return self._cache.cleanup_older_than(seconds)

    def delete_dir(self, path: Optional[str]):
        self._cache.delete_dir(path)
