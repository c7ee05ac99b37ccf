"""Decode on-chain AMM pool accounts into one unified pool model.

Supports:
  - Standard AMM: SPL Token Swap / Orca Token Swap v2, Raydium CPMM
  - Concentrated liquidity: Orca Whirlpool
  - Third-party AMM: Pump.fun AMM (PumpSwap)
"""

from pool_decoder.dispatcher import encode_pool, parse, parse_batch
from pool_decoder.errors import (
    DecodeError,
    EncoderNotRegistered,
    InvalidKey,
    ParseError,
    PoolDecoderError,
    RegistrationError,
    TruncatedAccount,
    UninitializedPool,
    UnknownLayoutVersion,
    UnsupportedProgram,
)
from pool_decoder.models import (
    ConcentratedLiquidityState,
    ConstantProductState,
    LiquidityState,
    Protocol,
    StandardAmmState,
    ThirdPartyAmmState,
    UnifiedPool,
)
from pool_decoder.registry import (
    ProtocolEntry,
    ProtocolRegistry,
    default_registry,
    register,
    resolve,
)

__all__ = [
    "ConcentratedLiquidityState",
    "ConstantProductState",
    "DecodeError",
    "EncoderNotRegistered",
    "InvalidKey",
    "LiquidityState",
    "ParseError",
    "PoolDecoderError",
    "Protocol",
    "ProtocolEntry",
    "ProtocolRegistry",
    "RegistrationError",
    "StandardAmmState",
    "ThirdPartyAmmState",
    "TruncatedAccount",
    "UnifiedPool",
    "UninitializedPool",
    "UnknownLayoutVersion",
    "UnsupportedProgram",
    "default_registry",
    "encode_pool",
    "parse",
    "parse_batch",
    "register",
    "resolve",
]
