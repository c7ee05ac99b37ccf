"""Dispatcher — the public parse entry point.

program id -> registry lookup -> layout decoder -> normalizer -> UnifiedPool.
Dispatch is by owning program only; account bytes are never sniffed to guess a
layout.
"""

from typing import Iterable, Optional, Union

from loguru import logger

from pool_decoder.errors import (
    EncoderNotRegistered,
    InvalidKey,
    ParseError,
    RegistrationError,
    UnsupportedProgram,
)
from pool_decoder.models import UnifiedPool, protocol_name
from pool_decoder.programs import ProgramIdLike, to_pubkey
from pool_decoder.registry import ProtocolRegistry, default_registry

AccountInput = Union[
    tuple[ProgramIdLike, bytes],
    tuple[ProgramIdLike, bytes, Optional[ProgramIdLike]],
]


def _key(field: str, value: ProgramIdLike):
    try:
        return to_pubkey(value)
    except (ValueError, TypeError) as e:
        raise InvalidKey(field, value, str(e)) from e


def parse(
    program_id: ProgramIdLike,
    data: bytes,
    pool_address: Optional[ProgramIdLike] = None,
    *,
    registry: Optional[ProtocolRegistry] = None,
) -> UnifiedPool:
    """Decode raw account bytes owned by ``program_id`` into a UnifiedPool.

    Raises:
        InvalidKey: the program id or pool address is not a valid key.
        UnsupportedProgram: no codec is registered for the program id.
        TruncatedAccount / UnknownLayoutVersion: the bytes don't fit the layout.
        UninitializedPool: the layout decoded but the pool was never set up.
        RegistrationError: the registered normalizer produced the wrong protocol.
    """
    registry = registry if registry is not None else default_registry
    pid = _key("program_id", program_id)
    address = _key("pool_address", pool_address) if pool_address is not None else None

    try:
        entry = registry.resolve(pid)
    except UnsupportedProgram:
        logger.warning(f"Unknown program ID: {pid}")
        raise

    try:
        record = entry.decoder(bytes(data))
        pool = entry.normalizer(record, pid, address)
    except ParseError as e:
        e.attach(entry.protocol, pid)
        logger.debug(f"Failed to parse pool {address or '?'}: {e}")
        raise

    if protocol_name(pool.protocol) != protocol_name(entry.protocol):
        raise RegistrationError(
            pid,
            f"normalizer produced {protocol_name(pool.protocol)}, "
            f"registered as {protocol_name(entry.protocol)}",
        )
    return pool


def parse_batch(
    accounts: Iterable[AccountInput],
    *,
    registry: Optional[ProtocolRegistry] = None,
) -> list[Union[UnifiedPool, ParseError]]:
    """Parse many accounts, returning a pool or the ParseError for each, in order."""
    results: list[Union[UnifiedPool, ParseError]] = []
    for account in accounts:
        program_id, data, *rest = account
        pool_address = rest[0] if rest else None
        try:
            results.append(parse(program_id, data, pool_address, registry=registry))
        except ParseError as e:
            results.append(e)

    failed = sum(1 for r in results if isinstance(r, ParseError))
    if failed:
        logger.debug(f"Batch parse: {len(results) - failed} ok, {failed} failed")
    return results


def encode_pool(pool: UnifiedPool, *, registry: Optional[ProtocolRegistry] = None) -> bytes:
    """Serialize a pool back to account bytes using its program's layout.

    Pools carry every stored region, so for an account of exactly the layout's
    size this reproduces the original bytes.
    """
    registry = registry if registry is not None else default_registry
    entry = registry.resolve(pool.program_id)
    if entry.encoder is None:
        raise EncoderNotRegistered(entry.protocol, pool.program_id)
    return entry.encoder(pool)
