"""Test protocol registration and lookup."""

from dataclasses import dataclass
from typing import ClassVar

import pytest
from solders.pubkey import Pubkey

from pool_decoder import clmm, parse, standard_amm
from pool_decoder.errors import RegistrationError, UnsupportedProgram
from pool_decoder.models import LiquidityState, Protocol, UnifiedPool
from pool_decoder.normalizer import normalize_clmm, normalize_standard_amm
from pool_decoder.programs import (
    ORCA_TOKEN_SWAP_V2_PROGRAM,
    ORCA_WHIRLPOOL_PROGRAM,
    PUMP_AMM_PROGRAM,
    RAYDIUM_CPMM_PROGRAM,
    SPL_TOKEN_SWAP_PROGRAM,
)
from pool_decoder.registry import (
    default_registry,
    register_clmm,
    register_standard_amm,
)

CUSTOM_PROGRAM = Pubkey.from_bytes(bytes([0x42]) * 32)


@dataclass(frozen=True)
class ToyState(LiquidityState):
    protocol: ClassVar[str] = "ToyAmm"
    reserve: int


def toy_decode(data: bytes) -> int:
    return data[0]


def toy_normalize(record: int, program_id: Pubkey, pool_address=None) -> UnifiedPool:
    key = Pubkey.from_bytes(bytes([record]) * 32)
    return UnifiedPool(
        protocol="ToyAmm",
        program_id=program_id,
        base_mint=key,
        quote_mint=key,
        base_vault=key,
        quote_vault=key,
        liquidity_state=ToyState(reserve=record),
        raw_layout_version=1,
    )


def test_builtins_registered():
    programs = default_registry.programs()
    assert programs[ORCA_TOKEN_SWAP_V2_PROGRAM] == Protocol.STANDARD_AMM
    assert programs[SPL_TOKEN_SWAP_PROGRAM] == Protocol.STANDARD_AMM
    assert programs[RAYDIUM_CPMM_PROGRAM] == Protocol.STANDARD_AMM
    assert programs[ORCA_WHIRLPOOL_PROGRAM] == Protocol.CONCENTRATED_LIQUIDITY
    assert programs[PUMP_AMM_PROGRAM] == Protocol.THIRD_PARTY_AMM


def test_resolve_accepts_string_and_bytes(registry):
    by_key = registry.resolve(ORCA_WHIRLPOOL_PROGRAM)
    assert registry.resolve(str(ORCA_WHIRLPOOL_PROGRAM)) is by_key
    assert registry.resolve(bytes(ORCA_WHIRLPOOL_PROGRAM)) is by_key
    assert by_key.decoder is clmm.decode


def test_resolve_unknown_program(registry):
    with pytest.raises(UnsupportedProgram) as exc:
        registry.resolve(CUSTOM_PROGRAM)
    assert exc.value.program_id == CUSTOM_PROGRAM


def test_register_same_entry_is_idempotent(registry):
    before = len(registry)
    first = register_standard_amm(registry, ORCA_TOKEN_SWAP_V2_PROGRAM)
    assert register_standard_amm(registry, ORCA_TOKEN_SWAP_V2_PROGRAM) == first
    assert len(registry) == before


def test_register_conflicting_protocol(registry):
    with pytest.raises(RegistrationError) as exc:
        register_clmm(registry, ORCA_TOKEN_SWAP_V2_PROGRAM)
    assert "StandardAmm" in exc.value.reason


def test_register_conflicting_decoder(registry):
    with pytest.raises(RegistrationError):
        registry.register(
            ORCA_TOKEN_SWAP_V2_PROGRAM,
            toy_decode,
            normalize_standard_amm,
            protocol=Protocol.STANDARD_AMM,
        )


def test_register_invalid_program_id(registry):
    with pytest.raises(RegistrationError):
        registry.register("not-a-key", standard_amm.decode, normalize_standard_amm, protocol="X")


def test_register_empty_protocol_tag(registry):
    with pytest.raises(RegistrationError):
        registry.register(CUSTOM_PROGRAM, toy_decode, toy_normalize, protocol="")


def test_register_runtime_protocol(registry):
    registry.register(CUSTOM_PROGRAM, toy_decode, toy_normalize, protocol="ToyAmm")
    assert CUSTOM_PROGRAM in registry
    assert registry.resolve(CUSTOM_PROGRAM).protocol == "ToyAmm"

    pool = parse(CUSTOM_PROGRAM, b"\x07", registry=registry)
    assert pool.protocol == "ToyAmm"
    assert pool.liquidity_state.reserve == 7
    assert pool.to_dict()["liquidity_state"] == {"protocol": "ToyAmm", "reserve": 7}


def test_register_existing_layout_under_new_program(registry):
    entry = register_clmm(registry, CUSTOM_PROGRAM)
    assert entry.protocol == Protocol.CONCENTRATED_LIQUIDITY
    assert entry.normalizer is normalize_clmm


def test_registration_does_not_mutate_previous_snapshot(registry):
    snapshot = registry.programs()
    registry.register(CUSTOM_PROGRAM, toy_decode, toy_normalize, protocol="ToyAmm")
    assert CUSTOM_PROGRAM not in snapshot
    assert CUSTOM_PROGRAM in registry.programs()


def test_contains_rejects_garbage(registry):
    assert "not-a-key" not in registry
    assert CUSTOM_PROGRAM not in registry
