"""Test environment-driven CLI configuration."""

import pytest
from solders.pubkey import Pubkey

from pool_decoder.config import DecoderConfig, apply_program_aliases, load_config
from pool_decoder.errors import RegistrationError
from pool_decoder.models import Protocol
from pool_decoder.programs import ORCA_WHIRLPOOL_PROGRAM, RAYDIUM_CPMM_PROGRAM

FORK_A = Pubkey.from_bytes(bytes([0x61]) * 32)
FORK_B = Pubkey.from_bytes(bytes([0x62]) * 32)


def test_defaults():
    config = load_config(env={})
    assert config.log_level == "INFO"
    assert config.json_logs is False
    assert config.program_aliases == {}


def test_reads_values():
    config = load_config(env={
        "LOG_LEVEL": "debug",
        "LOG_JSON": "TRUE",
        "EXTRA_CLMM_PROGRAMS": f" {FORK_A}, {FORK_B} ,",
        "EXTRA_THIRD_PARTY_AMM_PROGRAMS": "",
    })
    assert config.log_level == "DEBUG"
    assert config.json_logs is True
    assert config.program_aliases == {"Whirlpool": [FORK_A, FORK_B]}


def test_invalid_program_names_variable():
    with pytest.raises(ValueError, match="EXTRA_STANDARD_AMM_PROGRAMS"):
        load_config(env={"EXTRA_STANDARD_AMM_PROGRAMS": "not-a-key"})


def test_loads_dotenv_file(tmp_path, monkeypatch):
    monkeypatch.delenv("EXTRA_CLMM_PROGRAMS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(f"LOG_LEVEL=warning\nEXTRA_CLMM_PROGRAMS={FORK_A}\n")

    config = load_config(dotenv_path=env_file)

    assert config.log_level == "WARNING"
    assert config.program_aliases["Whirlpool"] == [FORK_A]


def test_apply_program_aliases(registry, clmm_data):
    config = DecoderConfig(program_aliases={
        "Whirlpool": [FORK_A],
        "TokenSwapV1": [FORK_B],
    })
    assert apply_program_aliases(config, registry) == 2
    assert registry.programs()[FORK_A] == Protocol.CONCENTRATED_LIQUIDITY
    assert registry.programs()[FORK_B] == Protocol.STANDARD_AMM

    # idempotent on re-apply
    assert apply_program_aliases(config, registry) == 2
    assert registry.resolve(FORK_A) == registry.resolve(ORCA_WHIRLPOOL_PROGRAM)


def test_alias_conflicting_with_builtin(registry):
    config = DecoderConfig(program_aliases={"TokenSwapV1": [ORCA_WHIRLPOOL_PROGRAM]})
    with pytest.raises(RegistrationError):
        apply_program_aliases(config, registry)


def test_raydium_cpmm_alias(registry):
    config = load_config(env={"EXTRA_RAYDIUM_CPMM_PROGRAMS": str(FORK_A)})
    assert config.program_aliases == {"RaydiumCpmm": [FORK_A]}

    apply_program_aliases(config, registry)
    assert registry.programs()[FORK_A] == Protocol.STANDARD_AMM
    assert registry.resolve(FORK_A).decoder is registry.resolve(RAYDIUM_CPMM_PROGRAM).decoder
