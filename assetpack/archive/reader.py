"""Streaming reader for the tape-archive container inside a vendor package.

The reader consumes a byte stream that is already free of the outer gzip
envelope and yields :class:`~assetpack.models.ArchiveEntry` objects lazily.
Only the header fields needed to recover paths and payloads are decoded:

=========  ======  =====  =================================================
field      offset  width  meaning
=========  ======  =====  =================================================
name       0       100    entry path, trailing NUL/space trimmed
size       124     12     ASCII octal payload byte count
typeflag   156     1      ``'5'`` marks a directory, anything else a file
prefix     345     155    path prefix for names longer than 100 bytes
=========  ======  =====  =================================================

Corruption never raises. Truncated headers or payloads stop the iteration and
leave a ``MalformedArchive`` diagnostic on the reader; unparseable size fields
fall back to zero and are counted as ``MalformedSize``. Only a failing byte
source raises, as :class:`ArchiveIOError`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import BinaryIO, Callable, Iterator, List, Optional

from ..logging import get_logger
from ..models import ArchiveDiagnostic, ArchiveEntry, DiagnosticKind

BLOCK_SIZE = 512
DIRECTORY_TYPEFLAG = b"5"
_TRIM = b"\x00 "
_OCTAL_DIGITS = re.compile(r"[0-7]+")


@dataclass(frozen=True)
class HeaderField:
    """Location of one fixed-width field inside a header block."""

    name: str
    offset: int
    width: int

    def slice(self, block: bytes) -> bytes:
        return block[self.offset : self.offset + self.width]


NAME_FIELD = HeaderField("name", 0, 100)
SIZE_FIELD = HeaderField("size", 124, 12)
TYPEFLAG_FIELD = HeaderField("typeflag", 156, 1)
PREFIX_FIELD = HeaderField("prefix", 345, 155)

HEADER_FIELDS = (NAME_FIELD, SIZE_FIELD, TYPEFLAG_FIELD, PREFIX_FIELD)


class ArchiveIOError(OSError):
    """Raised when the underlying byte source fails to read."""


class ReadCancelled(RuntimeError):
    """Raised when a cooperative cancellation request stops a read pass."""


def padding_for(size: int) -> int:
    """Return the number of bytes that realign ``size`` to the next block."""
    return (BLOCK_SIZE - size % BLOCK_SIZE) % BLOCK_SIZE


def parse_octal(raw: bytes) -> Optional[int]:
    """Decode an ASCII octal field, returning None when it is empty or invalid."""
    text = raw.strip(_TRIM).decode("ascii", errors="replace")
    if not _OCTAL_DIGITS.fullmatch(text):
        return None
    return int(text, 8)


def _decode_text(raw: bytes) -> str:
    return raw.rstrip(_TRIM).decode("utf-8", errors="replace")


class ArchiveReader:
    """Single-pass, forward-only reader over a decompressed archive stream.

    Iterating the reader consumes the stream; a fresh stream is required to
    scan again. Diagnostics accumulate on the instance and remain available
    after iteration ends.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        should_cancel: Callable[[], bool] | None = None,
    ) -> None:
        self._stream = stream
        self._should_cancel = should_cancel
        self._offset = 0
        self._consumed = False
        self.diagnostics: List[ArchiveDiagnostic] = []
        self.malformed_size_count = 0
        self.entry_count = 0
        self.logger = get_logger("archive.reader")

    @property
    def offset(self) -> int:
        """Number of bytes consumed from the stream so far."""
        return self._offset

    @property
    def malformed(self) -> bool:
        return any(diag.kind is DiagnosticKind.MALFORMED_ARCHIVE for diag in self.diagnostics)

    def __iter__(self) -> Iterator[ArchiveEntry]:
        if self._consumed:
            raise RuntimeError("ArchiveReader streams are not restartable; open a new stream")
        self._consumed = True
        return self._entries()

    def _entries(self) -> Iterator[ArchiveEntry]:
        while True:
            if self._should_cancel is not None and self._should_cancel():
                self.logger.info("Archive read cancelled at offset %d", self._offset)
                raise ReadCancelled(f"Archive read cancelled at offset {self._offset}")

            header_offset = self._offset
            block = self._read_exact(BLOCK_SIZE)
            if not block:
                return
            if len(block) < BLOCK_SIZE:
                self._record_malformed(
                    f"Truncated header: expected {BLOCK_SIZE} bytes, got {len(block)}",
                    header_offset,
                )
                return
            if not any(block):
                return

            name = _decode_text(NAME_FIELD.slice(block))
            prefix = _decode_text(PREFIX_FIELD.slice(block))
            if prefix:
                name = f"{prefix}/{name}"
            if not name:
                self._record_malformed("Header has an empty entry name", header_offset)
                return

            size = self._parse_size(SIZE_FIELD.slice(block), name, header_offset)

            if TYPEFLAG_FIELD.slice(block) == DIRECTORY_TYPEFLAG:
                self.entry_count += 1
                yield ArchiveEntry(path=name, is_directory=True)
                continue

            payload = self._read_exact(size)
            if len(payload) < size:
                self._record_malformed(
                    f"Truncated payload for {name}: expected {size} bytes, got {len(payload)}",
                    header_offset,
                )
                return

            self.entry_count += 1
            yield ArchiveEntry(path=name, is_directory=False, payload=payload)

            padding = padding_for(size)
            if padding and len(self._read_exact(padding)) < padding:
                self._record_malformed(
                    f"Truncated padding after {name}: expected {padding} bytes",
                    header_offset,
                )
                return

    def _parse_size(self, raw: bytes, name: str, header_offset: int) -> int:
        size = parse_octal(raw)
        if size is not None:
            return size
        self.malformed_size_count += 1
        diagnostic = ArchiveDiagnostic(
            kind=DiagnosticKind.MALFORMED_SIZE,
            message=f"Unreadable size field {raw!r} for {name}; treating as 0 bytes",
            offset=header_offset,
        )
        self.diagnostics.append(diagnostic)
        self.logger.warning("%s (offset %d)", diagnostic.message, header_offset)
        return 0

    def _record_malformed(self, message: str, offset: int) -> None:
        self.diagnostics.append(
            ArchiveDiagnostic(kind=DiagnosticKind.MALFORMED_ARCHIVE, message=message, offset=offset)
        )
        self.logger.warning("Malformed archive: %s (offset %d)", message, offset)

    def _read_exact(self, count: int) -> bytes:
        if count <= 0:
            return b""
        chunks: List[bytes] = []
        remaining = count
        while remaining > 0:
            try:
                chunk = self._stream.read(remaining)
            except OSError as exc:
                raise ArchiveIOError(
                    f"Failed to read archive stream at offset {self._offset}: {exc}"
                ) from exc
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
            self._offset += len(chunk)
        return b"".join(chunks)


__all__ = [
    "ArchiveIOError",
    "ArchiveReader",
    "BLOCK_SIZE",
    "HEADER_FIELDS",
    "HeaderField",
    "ReadCancelled",
    "padding_for",
    "parse_octal",
]
