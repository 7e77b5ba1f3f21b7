"""Helpers for hand-building tape-archive byte buffers in tests."""

from __future__ import annotations

import gzip
import io
from pathlib import Path
from typing import List

BLOCK = 512


def _field(value: bytes, width: int) -> bytes:
    if len(value) > width:
        raise ValueError(f"value {value!r} does not fit in {width} bytes")
    return value + b"\x00" * (width - len(value))


def tar_header(
    name: str,
    size: int = 0,
    *,
    typeflag: bytes = b"0",
    prefix: str = "",
    size_field: bytes | None = None,
) -> bytes:
    """Return a 512-byte ustar header; ``size_field`` overrides the encoded size."""
    header = bytearray(BLOCK)
    header[0:100] = _field(name.encode("utf-8"), 100)
    header[100:108] = _field(b"0000644", 8)
    header[108:116] = _field(b"0000000", 8)
    header[116:124] = _field(b"0000000", 8)
    raw_size = size_field if size_field is not None else f"{size:011o}".encode("ascii")
    header[124:136] = _field(raw_size, 12)
    header[136:148] = _field(b"00000000000", 12)
    header[156:157] = typeflag
    header[257:263] = b"ustar\x00"
    header[263:265] = b"00"
    header[345:500] = _field(prefix.encode("utf-8"), 155)
    header[148:156] = b" " * 8
    checksum = sum(header)
    header[148:156] = f"{checksum:06o}".encode("ascii") + b"\x00 "
    return bytes(header)


def padding(size: int) -> bytes:
    return b"\x00" * ((BLOCK - size % BLOCK) % BLOCK)


class ArchiveBuilder:
    """Accumulates archive members and renders them as raw bytes."""

    def __init__(self) -> None:
        self._chunks: List[bytes] = []

    def add_directory(self, path: str) -> "ArchiveBuilder":
        self._chunks.append(tar_header(path.rstrip("/") + "/", typeflag=b"5"))
        return self

    def add_file(self, path: str, payload: bytes = b"", *, prefix: str = "") -> "ArchiveBuilder":
        self._chunks.append(tar_header(path, len(payload), prefix=prefix))
        self._chunks.append(payload + padding(len(payload)))
        return self

    def add_raw(self, data: bytes) -> "ArchiveBuilder":
        self._chunks.append(data)
        return self

    def add_asset(
        self,
        asset_id: str,
        destination: str,
        payload: bytes | None = b"",
        *,
        meta: bool = True,
        with_directory: bool = True,
    ) -> "ArchiveBuilder":
        """Add one identifier group the way package exporters lay it out."""
        if with_directory:
            self.add_directory(asset_id)
        if payload is not None:
            self.add_file(f"{asset_id}/asset", payload)
        if meta:
            self.add_file(f"{asset_id}/asset.meta", f"guid: {asset_id}\n".encode("utf-8"))
        self.add_file(f"{asset_id}/pathname", destination.encode("utf-8"))
        return self

    def build(self, *, end_blocks: int = 2) -> bytes:
        return b"".join(self._chunks) + b"\x00" * (BLOCK * end_blocks)

    def stream(self, *, end_blocks: int = 2) -> io.BytesIO:
        return io.BytesIO(self.build(end_blocks=end_blocks))

    def write_package(self, path: Path, *, compress: bool = True) -> Path:
        data = self.build()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(gzip.compress(data) if compress else data)
        return path


__all__ = ["ArchiveBuilder", "padding", "tar_header"]
