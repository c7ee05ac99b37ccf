"""CLI configuration — loaded from .env or environment variables.

The decoding core never reads the environment; only the command line tool
does, through load_config().
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from solders.pubkey import Pubkey

from pool_decoder.models import (
    ConcentratedLiquidityState,
    ConstantProductState,
    StandardAmmState,
    ThirdPartyAmmState,
)
from pool_decoder.registry import BUILTIN_REGISTRARS, ProtocolRegistry


@dataclass
class DecoderConfig:
    log_level: str = "INFO"
    json_logs: bool = False
    # Extra deployments of a built-in layout (forks, devnet programs), by layout name
    program_aliases: dict[str, list[Pubkey]] = field(default_factory=dict)


ALIAS_ENV_VARS = {
    StandardAmmState.layout: "EXTRA_STANDARD_AMM_PROGRAMS",
    ConstantProductState.layout: "EXTRA_RAYDIUM_CPMM_PROGRAMS",
    ConcentratedLiquidityState.layout: "EXTRA_CLMM_PROGRAMS",
    ThirdPartyAmmState.layout: "EXTRA_THIRD_PARTY_AMM_PROGRAMS",
}


def _parse_program_list(raw: str, var: str) -> list[Pubkey]:
    programs = []
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            programs.append(Pubkey.from_string(item))
        except ValueError as e:
            raise ValueError(f"{var}: invalid program id {item!r}") from e
    return programs


def load_config(
    env: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[Path] = None,
) -> DecoderConfig:
    if env is None:
        env_path = dotenv_path or Path.cwd() / ".env"
        if env_path.exists():
            load_dotenv(env_path)
        env = os.environ

    aliases = {}
    for layout, var in ALIAS_ENV_VARS.items():
        programs = _parse_program_list(env.get(var, ""), var)
        if programs:
            aliases[layout] = programs

    return DecoderConfig(
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        json_logs=env.get("LOG_JSON", "false").lower() == "true",
        program_aliases=aliases,
    )


def apply_program_aliases(config: DecoderConfig, registry: ProtocolRegistry) -> int:
    """Register every configured alias with its family's built-in codec."""
    count = 0
    for layout, programs in config.program_aliases.items():
        registrar = BUILTIN_REGISTRARS[layout]
        for pid in programs:
            registrar(registry, pid)
            count += 1
    return count
