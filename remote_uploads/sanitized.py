"""
A thin wrapper around a file on the local disk, as handed to the stores
by the upload pipeline.
"""

import mimetypes
import os
import shutil
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from .utils import get_size_from_path, get_type_from_path

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class SanitizedFile(BaseModel):
    path: Path
    "Location of the file on the local disk."
    content_type_override: Optional[str] = None

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def extension(self) -> str:
        return get_type_from_path(self.filename) if "." in self.filename else ""

    @property
    def exists(self) -> bool:
        return self.path.exists()

    @property
    def size(self) -> int:
        return get_size_from_path(self.path)

    @property
    def permissions(self) -> int:
        return self.path.stat().st_mode & 0o7777

    @property
    def content_type(self) -> str:
        """
        The content type, inferred from the extension only. The bytes of
        the file are never inspected.
        """

        if self.content_type_override is not None:
            return self.content_type_override

        guessed, _ = mimetypes.guess_type(self.path.name)

        return guessed or DEFAULT_CONTENT_TYPE

    def read(self) -> bytes:
        with open(self.path, "rb") as handle:
            return handle.read()

    def move_to(
        self,
        new_path: Path | str,
        permissions: Optional[int] = None,
        directory_permissions: Optional[int] = None,
        overwrite: bool = True,
    ) -> "SanitizedFile":
        """
        Move the file to a new location, creating any missing directories.

        Parameters
        ----------
        new_path : Path | str
            Absolute destination path, including the file name.
        permissions : int, optional
            Mode to set on the moved file.
        directory_permissions : int, optional
            Mode to set on the directory that receives the file.
        overwrite : bool
            Replace any existing file at new_path.

        Returns
        -------
        SanitizedFile
            The file at its new location.

        Raises
        ------
        FileExistsError
            If new_path exists and overwrite is False.
        OSError
            If the move fails (e.g. ENOSPC, EMLINK).
        """

        new_path = Path(new_path)

        if new_path.exists() and not overwrite:
            raise FileExistsError(f"File {new_path} already exists.")

        new_path.parent.mkdir(parents=True, exist_ok=True)

        if directory_permissions is not None:
            os.chmod(new_path.parent, directory_permissions)

        shutil.move(self.path, new_path)

        if permissions is not None:
            os.chmod(new_path, permissions)

        return SanitizedFile(
            path=new_path, content_type_override=self.content_type_override
        )
