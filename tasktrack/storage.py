"""
TASKTRACK - Backing Store
=========================
The durable medium holding the serialized task collection between runs.

The manager only needs three things from it: does the blob exist, read
the whole blob as text, and overwrite the whole blob with new text.
"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

logger = logging.getLogger("tasktrack.storage")


class BlobStore(ABC):
    """Whole-blob read/write store"""

    @abstractmethod
    def exists(self) -> bool:
        """Return True if a blob has been written"""

    @abstractmethod
    def read_text(self) -> str:
        """Return the full blob contents"""

    @abstractmethod
    def write_text(self, text: str) -> None:
        """Replace the full blob contents with ``text``"""


class FileBlobStore(BlobStore):
    """
    Blob store backed by a single local file.

    Writes go to a sibling ``.tmp`` file first and are renamed into place,
    so a crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding

    def exists(self) -> bool:
        return self.path.exists()

    def read_text(self) -> str:
        with open(self.path, "r", encoding=self.encoding) as f:
            return f.read()

    def write_text(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding=self.encoding) as f:
                f.write(text)
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(text)} chars to {self.path}")

    def __str__(self) -> str:
        return str(self.path)

    def __repr__(self) -> str:
        return f"FileBlobStore({str(self.path)!r})"
