"""
LangKeeper file helpers.

All disk access is blocking and scoped to a single call: files are opened,
read or written, and closed again. Sources are handled as UTF-8 bytes so
that parser byte offsets can be used for splicing, and a leading BOM is
kept aside and restored on write.
"""

import codecs
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from langkeeper_exceptions import FileOperationError, WriteFailure
from langkeeper_logger import get_logger

logger = get_logger("core")


@dataclass(frozen=True)
class SourceText:
    """Raw content of a source file."""
    path: Path
    data: bytes
    bom: bool = False

    @property
    def newline(self) -> bytes:
        """Newline sequence used by the file (defaults to LF)."""
        return b"\r\n" if b"\r\n" in self.data else b"\n"

    def text(self) -> str:
        return self.data.decode("utf-8")

    def raw(self) -> bytes:
        """Bytes exactly as they are (or will be) on disk."""
        return (codecs.BOM_UTF8 + self.data) if self.bom else self.data


def read_source(path) -> Optional[SourceText]:
    """
    Read a source file as bytes.

    Returns:
        SourceText, or None if the file does not exist

    Raises:
        FileOperationError: If the file exists but cannot be read or is not UTF-8
    """
    path = Path(path)
    if not path.is_file():
        return None
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise FileOperationError(f"Could not read {path}: {e}", file_path=str(path), operation="read") from e

    bom = raw.startswith(codecs.BOM_UTF8)
    data = raw[len(codecs.BOM_UTF8):] if bom else raw
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FileOperationError(f"{path} is not valid UTF-8: {e}", file_path=str(path), operation="decode") from e

    logger.debug(f"Read {path} ({len(data)} bytes)")
    return SourceText(path=path, data=data, bom=bom)


def write_source(path, raw: bytes):
    """
    Replace a file's content atomically.

    The data is written to a temporary file in the same directory which is
    then moved over the target, so readers never observe a half-written file.

    Raises:
        WriteFailure: If the file cannot be written
    """
    path = Path(path)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
        with os.fdopen(fd, "wb") as f:
            f.write(raw)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise WriteFailure(f"Could not write {path}: {e}", file_path=str(path)) from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
    logger.debug(f"Wrote {path} ({len(raw)} bytes)")


def restore_source(path, original: Optional[SourceText]):
    """
    Put a file back the way it was before a failed save.

    A file that did not exist before is removed again. Errors are logged,
    not raised, since this only runs while another error is propagating.
    """
    path = Path(path)
    try:
        if original is None:
            if path.exists():
                path.unlink()
        else:
            write_source(path, original.raw())
        logger.warning(f"Rolled back {path}")
    except (OSError, WriteFailure) as e:
        logger.error(f"Rollback of {path} failed: {e}")
