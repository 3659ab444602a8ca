"""
The uploader context consumed by the stores. It decides where objects live
(store_path) and where incoming files are staged locally (cache_path);
the stores never compute these themselves.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from .utils import generate_cache_id


class Uploader(BaseModel):
    root: Path
    "Base directory that cache paths are expanded against."
    store_dir: str = "uploads"
    "Directory, relative to the remote folder, that objects are stored in."
    cache_dir: str = "uploads/tmp"
    "Directory, relative to root, holding one sub-directory per cache id."
    permissions: int = 0o644
    directory_permissions: int = 0o755
    filename: Optional[str] = None
    "Name of the file currently being uploaded."
    cache_id: str = Field(default_factory=generate_cache_id)

    def store_path(self, identifier: Optional[str] = None) -> str:
        """
        Relative path of an object on the remote store.
        """

        name = identifier if identifier is not None else self.filename

        if not name:
            raise ValueError("No identifier given and no filename set on the uploader.")

        return f"{self.store_dir}/{name}" if self.store_dir else name

    def cache_path(self, identifier: Optional[str] = None) -> str:
        """
        Relative path (against root) of a file in the local cache. The
        identifier, if given, is of the form 'cache_id/filename'.
        """

        if identifier is not None:
            return f"{self.cache_dir}/{identifier}"

        if not self.filename:
            raise ValueError("No identifier given and no filename set on the uploader.")

        return f"{self.cache_dir}/{self.cache_id}/{self.filename}"
