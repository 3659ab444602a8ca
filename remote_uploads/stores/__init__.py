"""
All valid storage engines, by the short name the upload pipeline uses.
"""

from ..exceptions import NoSuchStoreError
from .cache import LocalCache
from .core import CoreRemoteFile, CoreStore
from .ftp import FTPFile, FTPStore
from .sftp import SFTPFile, SFTPStore

Stores: dict[str, type[CoreStore]] = {
    "ftp": FTPStore,
    "sftp": SFTPStore,
}


def store_from_name(name: str) -> type[CoreStore]:
    """
    Get a storage engine from its name.
    """

    try:
        return Stores[name]
    except KeyError:
        raise NoSuchStoreError(name) from None
