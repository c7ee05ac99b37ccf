"""Protocol registry — maps owning program ids to the codec that decodes them.

Built-in protocols are registered at import time into ``default_registry``.
Runtime additions go through the same ``register`` path, so supporting a new
protocol never touches the dispatcher.

Writers swap in a fresh mapping under a lock; readers use whatever snapshot is
current without locking.
"""

import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from loguru import logger
from solders.pubkey import Pubkey

from pool_decoder import clmm, pump_amm, raydium_cpmm, standard_amm
from pool_decoder.errors import RegistrationError, UnsupportedProgram
from pool_decoder.models import (
    ConcentratedLiquidityState,
    ConstantProductState,
    Protocol,
    ProtocolTag,
    StandardAmmState,
    ThirdPartyAmmState,
    UnifiedPool,
    protocol_name,
)
from pool_decoder.normalizer import (
    encode_clmm_pool,
    encode_pump_amm_pool,
    encode_raydium_cpmm_pool,
    encode_standard_amm_pool,
    normalize_clmm,
    normalize_pump_amm,
    normalize_raydium_cpmm,
    normalize_standard_amm,
)
from pool_decoder.programs import (
    ORCA_TOKEN_SWAP_V2_PROGRAM,
    ORCA_WHIRLPOOL_PROGRAM,
    PUMP_AMM_PROGRAM,
    RAYDIUM_CPMM_PROGRAM,
    SPL_TOKEN_SWAP_PROGRAM,
    ProgramIdLike,
    to_pubkey,
)

Decoder = Callable[[bytes], Any]
Normalizer = Callable[[Any, Pubkey, Optional[Pubkey]], UnifiedPool]
Encoder = Callable[[UnifiedPool], bytes]


@dataclass(frozen=True)
class ProtocolEntry:
    """Codec registered for one program id."""
    protocol: ProtocolTag
    decoder: Decoder
    normalizer: Normalizer
    encoder: Optional[Encoder] = None


class ProtocolRegistry:
    """Program id -> ProtocolEntry, read-mostly."""

    def __init__(self):
        self._entries: dict[Pubkey, ProtocolEntry] = {}
        self._lock = threading.Lock()

    def register(
        self,
        program_id: ProgramIdLike,
        decoder: Decoder,
        normalizer: Normalizer,
        *,
        protocol: ProtocolTag,
        encoder: Optional[Encoder] = None,
    ) -> ProtocolEntry:
        """Register a codec. Re-registering an identical entry is a no-op.

        Raises RegistrationError if the program id is already bound to a
        different codec or protocol tag.
        """
        try:
            pid = to_pubkey(program_id)
        except (ValueError, TypeError) as e:
            raise RegistrationError(program_id, f"invalid program id ({e})") from e
        if not protocol_name(protocol):
            raise RegistrationError(pid, "protocol tag is empty")

        entry = ProtocolEntry(
            protocol=protocol,
            decoder=decoder,
            normalizer=normalizer,
            encoder=encoder,
        )

        with self._lock:
            existing = self._entries.get(pid)
            if existing is not None:
                if existing == entry:
                    return existing
                if protocol_name(existing.protocol) != protocol_name(protocol):
                    reason = (
                        f"already registered as {protocol_name(existing.protocol)}, "
                        f"not {protocol_name(protocol)}"
                    )
                else:
                    reason = f"a different {protocol_name(protocol)} codec is already registered"
                raise RegistrationError(pid, reason)

            entries = dict(self._entries)
            entries[pid] = entry
            self._entries = entries

        logger.debug(f"Registered {protocol_name(protocol)} decoder for {pid}")
        return entry

    def resolve(self, program_id: ProgramIdLike) -> ProtocolEntry:
        """Look up the codec for a program id. Raises UnsupportedProgram on miss."""
        pid = to_pubkey(program_id)
        entry = self._entries.get(pid)
        if entry is None:
            raise UnsupportedProgram(pid)
        return entry

    def programs(self) -> dict[Pubkey, ProtocolTag]:
        return {pid: entry.protocol for pid, entry in self._entries.items()}

    def __contains__(self, program_id: ProgramIdLike) -> bool:
        try:
            return to_pubkey(program_id) in self._entries
        except (ValueError, TypeError):
            return False

    def __len__(self) -> int:
        return len(self._entries)


# ── Built-ins ──

STANDARD_AMM_PROGRAMS = (ORCA_TOKEN_SWAP_V2_PROGRAM, SPL_TOKEN_SWAP_PROGRAM)
RAYDIUM_CPMM_PROGRAMS = (RAYDIUM_CPMM_PROGRAM,)
CLMM_PROGRAMS = (ORCA_WHIRLPOOL_PROGRAM,)
THIRD_PARTY_AMM_PROGRAMS = (PUMP_AMM_PROGRAM,)


def register_standard_amm(registry: ProtocolRegistry, program_id: ProgramIdLike) -> ProtocolEntry:
    return registry.register(
        program_id,
        standard_amm.decode,
        normalize_standard_amm,
        protocol=Protocol.STANDARD_AMM,
        encoder=encode_standard_amm_pool,
    )


def register_raydium_cpmm(registry: ProtocolRegistry, program_id: ProgramIdLike) -> ProtocolEntry:
    return registry.register(
        program_id,
        raydium_cpmm.decode,
        normalize_raydium_cpmm,
        protocol=Protocol.STANDARD_AMM,
        encoder=encode_raydium_cpmm_pool,
    )


def register_clmm(registry: ProtocolRegistry, program_id: ProgramIdLike) -> ProtocolEntry:
    return registry.register(
        program_id,
        clmm.decode,
        normalize_clmm,
        protocol=Protocol.CONCENTRATED_LIQUIDITY,
        encoder=encode_clmm_pool,
    )


def register_pump_amm(registry: ProtocolRegistry, program_id: ProgramIdLike) -> ProtocolEntry:
    return registry.register(
        program_id,
        pump_amm.decode,
        normalize_pump_amm,
        protocol=Protocol.THIRD_PARTY_AMM,
        encoder=encode_pump_amm_pool,
    )


# Keyed by layout name: one protocol tag can cover several layouts.
BUILTIN_REGISTRARS: dict[str, Callable[[ProtocolRegistry, ProgramIdLike], ProtocolEntry]] = {
    StandardAmmState.layout: register_standard_amm,
    ConstantProductState.layout: register_raydium_cpmm,
    ConcentratedLiquidityState.layout: register_clmm,
    ThirdPartyAmmState.layout: register_pump_amm,
}


def register_builtin_protocols(registry: ProtocolRegistry) -> ProtocolRegistry:
    for pid in STANDARD_AMM_PROGRAMS:
        register_standard_amm(registry, pid)
    for pid in RAYDIUM_CPMM_PROGRAMS:
        register_raydium_cpmm(registry, pid)
    for pid in CLMM_PROGRAMS:
        register_clmm(registry, pid)
    for pid in THIRD_PARTY_AMM_PROGRAMS:
        register_pump_amm(registry, pid)
    return registry


default_registry = register_builtin_protocols(ProtocolRegistry())


def register(
    program_id: ProgramIdLike,
    decoder: Decoder,
    normalizer: Normalizer,
    *,
    protocol: ProtocolTag,
    encoder: Optional[Encoder] = None,
) -> ProtocolEntry:
    """Register a protocol on the process-wide default registry."""
    return default_registry.register(
        program_id, decoder, normalizer, protocol=protocol, encoder=encoder
    )


def resolve(program_id: ProgramIdLike) -> ProtocolEntry:
    return default_registry.resolve(program_id)
