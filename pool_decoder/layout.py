"""Fixed-offset readers and writers for little-endian account layouts."""

import hashlib
import struct
from dataclasses import dataclass
from typing import Optional, Sequence

from solders.pubkey import Pubkey

from pool_decoder.errors import TruncatedAccount, UnknownLayoutVersion

PUBKEY_LEN = 32


def anchor_account_discriminator(name: str) -> bytes:
    """Compute Anchor account discriminator: SHA256("account:{name}")[:8]."""
    return hashlib.sha256(f"account:{name}".encode()).digest()[:8]


@dataclass(frozen=True)
class LayoutVersion:
    """One known layout within a protocol family."""
    discriminator: bytes
    version: int
    size: int


def select_layout(
    data: bytes,
    versions: Sequence[LayoutVersion],
    protocol: Optional[str] = None,
) -> LayoutVersion:
    """Pick the layout for ``data`` by its leading discriminator.

    Raises TruncatedAccount when the data is shorter than the smallest known
    layout or than the selected one, UnknownLayoutVersion when the
    discriminator is not known.
    """
    min_size = min(v.size for v in versions)
    if len(data) < min_size:
        raise TruncatedAccount(min_size, len(data), protocol)

    disc = bytes(data[:len(versions[0].discriminator)])
    for layout in versions:
        if layout.discriminator == disc:
            if len(data) < layout.size:
                raise TruncatedAccount(layout.size, len(data), protocol)
            return layout

    raise UnknownLayoutVersion(disc, protocol)


# ── Readers ──

def read_pubkey(data: bytes, offset: int) -> Pubkey:
    return Pubkey.from_bytes(bytes(data[offset:offset + PUBKEY_LEN]))


def read_u8(data: bytes, offset: int) -> int:
    return data[offset]


def read_u16(data: bytes, offset: int) -> int:
    return struct.unpack_from("<H", data, offset)[0]


def read_i32(data: bytes, offset: int) -> int:
    return struct.unpack_from("<i", data, offset)[0]


def read_u64(data: bytes, offset: int) -> int:
    return struct.unpack_from("<Q", data, offset)[0]


def read_u128(data: bytes, offset: int) -> int:
    lo = struct.unpack_from("<Q", data, offset)[0]
    hi = struct.unpack_from("<Q", data, offset + 8)[0]
    return (hi << 64) | lo


def read_bytes(data: bytes, offset: int, length: int) -> bytes:
    return bytes(data[offset:offset + length])


# ── Writers ──

def write_pubkey(buf: bytearray, offset: int, key: Pubkey):
    buf[offset:offset + PUBKEY_LEN] = bytes(key)


def write_u8(buf: bytearray, offset: int, value: int):
    struct.pack_into("<B", buf, offset, value)


def write_u16(buf: bytearray, offset: int, value: int):
    struct.pack_into("<H", buf, offset, value)


def write_i32(buf: bytearray, offset: int, value: int):
    struct.pack_into("<i", buf, offset, value)


def write_u64(buf: bytearray, offset: int, value: int):
    struct.pack_into("<Q", buf, offset, value)


def write_u128(buf: bytearray, offset: int, value: int):
    struct.pack_into("<QQ", buf, offset, value & ((1 << 64) - 1), value >> 64)


def write_bytes(buf: bytearray, offset: int, value: bytes):
    buf[offset:offset + len(value)] = value
