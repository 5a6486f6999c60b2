"""Byte and text storage for named, slash-separated paths.

The inventory repository and the image store only ever talk to a
``BlobStorage``; ``LocalBlobStorage`` maps the paths onto a directory tree.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import threading
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import Optional, Protocol, runtime_checkable

from homestock.core.constants import BACKUP_TIMESTAMP_FORMAT
from homestock.core.dates import Clock

logger = logging.getLogger(__name__)


@runtime_checkable
class BlobStorage(Protocol):
    def read_text(self, path: str) -> str: ...

    def write_text(self, path: str, text: str) -> None: ...

    def read_bytes(self, path: str) -> Optional[bytes]: ...

    def write_bytes(self, path: str, data: bytes) -> None: ...

    def delete_file(self, path: str) -> None: ...

    def list_files(self, prefix: str = "") -> list[str]: ...

    def backup_file(self, path: str) -> Optional[str]: ...


def _clean_relative(path: str) -> PurePosixPath:
    relative = PurePosixPath(str(path).replace("\\", "/").lstrip("/"))
    if not relative.parts or any(part in ("..", ".") for part in relative.parts):
        raise ValueError(f"Invalid storage path: {path!r}")
    return relative


def backup_name(path: str, stamp: str, counter: int = 0) -> str:
    relative = PurePosixPath(path)
    suffix = f"_{counter}" if counter else ""
    return str(relative.with_name(f"{relative.stem}_{stamp}{suffix}{relative.suffix}"))


class LocalBlobStorage:
    """``BlobStorage`` backed by files below ``root``."""

    def __init__(self, root, *, clock: Optional[Clock] = None):
        self.root = Path(root).expanduser()
        self._clock = clock or datetime.now
        self._backup_lock = threading.Lock()

    def resolve(self, path: str) -> Path:
        return self.root.joinpath(*_clean_relative(path).parts)

    def read_text(self, path: str) -> str:
        target = self.resolve(path)
        try:
            return target.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""

    def write_text(self, path: str, text: str) -> None:
        self.write_bytes(path, text.encode("utf-8"))

    def read_bytes(self, path: str) -> Optional[bytes]:
        target = self.resolve(path)
        try:
            return target.read_bytes()
        except FileNotFoundError:
            return None

    def write_bytes(self, path: str, data: bytes) -> None:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete_file(self, path: str) -> None:
        self.resolve(path).unlink(missing_ok=True)

    def list_files(self, prefix: str = "") -> list[str]:
        base = self.resolve(prefix) if prefix.strip("/") else self.root
        if base.is_file():
            return [base.relative_to(self.root).as_posix()]
        if not base.is_dir():
            return []
        return sorted(
            item.relative_to(self.root).as_posix()
            for item in base.rglob("*")
            if item.is_file() and not item.name.startswith(".")
        )

    def backup_file(self, path: str) -> Optional[str]:
        source = self.resolve(path)
        if not source.is_file():
            logger.warning("Nothing to back up at %s.", path)
            return None
        stamp = self._clock().strftime(BACKUP_TIMESTAMP_FORMAT)
        with self._backup_lock:
            counter = 0
            name = backup_name(path, stamp)
            while self.resolve(name).exists():
                counter += 1
                name = backup_name(path, stamp, counter)
            try:
                shutil.copy2(source, self.resolve(name))
            except OSError:
                logger.exception("Unable to back up %s.", path)
                return None
        return name


__all__ = ["BlobStorage", "LocalBlobStorage", "backup_name"]
