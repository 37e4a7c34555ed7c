"""Open and save single files for the editor."""

from __future__ import annotations

import codecs
import logging

import chardet

from core_types import PathLike, ensure_path
from serde_msgspec import StructBaseResult
from workspace.errors import WorkspaceIOError

logger = logging.getLogger(__name__)

_BOM_UTF8 = codecs.BOM_UTF8
DEFAULT_ENCODING = "utf-8"


class FileStat(StructBaseResult, frozen=True):
    """Filesystem metadata reported back to the editor."""

    path: str
    last_modified: int
    size: int


class FileContent(StructBaseResult, frozen=True):
    """Decoded file content with the encoding it was read as."""

    path: str
    content: str
    encoding: str
    stat: FileStat


def detect_encoding(data: bytes, *, default: str = DEFAULT_ENCODING) -> str:
    """Return the best-guess text encoding of ``data``.

    A UTF-8 BOM or bytes that decode cleanly as UTF-8 short-circuit detection;
    otherwise ``chardet`` guesses, falling back to ``default`` when it cannot.

    Returns
    -------
    str
        Codec name usable with ``bytes.decode``.
    """
    if data.startswith(_BOM_UTF8):
        return "utf-8-sig"
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        pass
    else:
        return "utf-8"
    guess = chardet.detect(data).get("encoding")
    if not guess:
        return default
    try:
        codecs.lookup(guess)
    except LookupError:
        logger.debug("chardet guessed unknown codec %r; using %s", guess, default)
        return default
    return guess


def file_stat(path: PathLike) -> FileStat:
    """Return size and modification time (epoch milliseconds) for ``path``.

    Returns
    -------
    FileStat
        Metadata snapshot.

    Raises
    ------
    WorkspaceIOError
        Raised when the metadata cannot be read.
    """
    file_path = ensure_path(path)
    try:
        info = file_path.stat()
    except OSError as exc:
        raise WorkspaceIOError(file_path, str(exc)) from exc
    return FileStat(
        path=str(file_path),
        last_modified=info.st_mtime_ns // 1_000_000,
        size=info.st_size,
    )


def open_file(path: PathLike) -> FileContent:
    """Read a file, detect its encoding, and decode it.

    Malformed byte sequences are replaced rather than rejected.

    Returns
    -------
    FileContent
        Decoded content plus encoding and metadata.

    Raises
    ------
    WorkspaceIOError
        Raised when the file cannot be read.
    """
    file_path = ensure_path(path)
    try:
        data = file_path.read_bytes()
    except OSError as exc:
        raise WorkspaceIOError(file_path, str(exc)) from exc
    encoding = detect_encoding(data)
    return FileContent(
        path=str(file_path),
        content=data.decode(encoding, errors="replace"),
        encoding=encoding,
        stat=file_stat(file_path),
    )


def save_file(path: PathLike, content: str) -> FileStat:
    """Write ``content`` as UTF-8 and return the fresh metadata.

    Returns
    -------
    FileStat
        Metadata after the write.

    Raises
    ------
    WorkspaceIOError
        Raised when the write fails.
    """
    file_path = ensure_path(path)
    try:
        with file_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as exc:
        raise WorkspaceIOError(file_path, str(exc)) from exc
    return file_stat(file_path)


__all__ = [
    "DEFAULT_ENCODING",
    "FileContent",
    "FileStat",
    "detect_encoding",
    "file_stat",
    "open_file",
    "save_file",
]
