"""Target types for BitTorrent metainfo (.torrent) files.

Single-file torrents carry ``info.length``; multi-file torrents carry
``info.files`` instead. Both are optional here so either layout decodes.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AnyUrl, BaseModel, Field

from typedbencode.core.decoder import BencodeDecoder
from typedbencode.logging_config import LoggingContext
from typedbencode.models import DecoderConfig

SHA1_HASH_LENGTH = 20


class File(BaseModel):
    """One file of a multi-file torrent."""

    length: int = Field(..., ge=0, description="File length in bytes")
    path: list[str] = Field(..., description="Path components")


class Info(BaseModel):
    """The ``info`` dictionary."""

    name: str = Field(..., description="Suggested file or directory name")
    piece_length: int = Field(
        ...,
        alias="piece length",
        gt=0,
        description="Bytes per piece",
    )
    pieces: bytes = Field(..., description="Concatenated SHA-1 piece hashes")
    length: int | None = Field(None, ge=0, description="Single-file length")
    files: list[File] | None = Field(None, description="Multi-file entries")
    private: bool | None = Field(None, description="BEP 27 private flag")

    @property
    def piece_hashes(self) -> list[bytes]:
        """Split ``pieces`` into individual 20-byte hashes."""
        return [
            self.pieces[i : i + SHA1_HASH_LENGTH]
            for i in range(0, len(self.pieces), SHA1_HASH_LENGTH)
        ]

    @property
    def total_length(self) -> int:
        """Total payload size in bytes."""
        if self.files is not None:
            return sum(f.length for f in self.files)
        return self.length or 0


class Metainfo(BaseModel):
    """Top-level metainfo dictionary."""

    announce: AnyUrl = Field(..., description="Tracker URL")
    announce_list: list[list[str]] | None = Field(
        None,
        alias="announce-list",
        description="BEP 12 tracker tiers",
    )
    comment: str | None = Field(None, description="Free-form comment")
    created_by: str | None = Field(None, alias="created by")
    creation_date: int | None = Field(None, alias="creation date")
    info: Info


def load_metainfo(
    source: str | Path | bytes,
    config: DecoderConfig | None = None,
) -> Metainfo:
    """Decode a metainfo file from a path or from raw bytes."""
    if isinstance(source, bytes):
        data = source
    else:
        data = Path(source).read_bytes()
    with LoggingContext("load metainfo", size=len(data)):
        return BencodeDecoder(config).decode(Metainfo, data)
