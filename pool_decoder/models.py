"""Unified pool model shared by every supported protocol."""

import json
from dataclasses import dataclass, fields
from enum import Enum
from typing import ClassVar, Optional, Union

from solders.pubkey import Pubkey


class Protocol(str, Enum):
    STANDARD_AMM = "StandardAmm"
    CONCENTRATED_LIQUIDITY = "ConcentratedLiquidity"
    THIRD_PARTY_AMM = "ThirdPartyAmm"


# Built-in tags are Protocol members; runtime-registered protocols may use any str.
ProtocolTag = Union[Protocol, str]


def protocol_name(tag: ProtocolTag) -> str:
    return tag.value if isinstance(tag, Protocol) else str(tag)


def as_protocol(name: str) -> ProtocolTag:
    try:
        return Protocol(name)
    except ValueError:
        return name


def _pubkey_or_none(value: Optional[str]) -> Optional[Pubkey]:
    return None if value is None else Pubkey.from_string(value)


def _str_or_none(value: Optional[Pubkey]) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class LiquidityState:
    """Protocol-specific pool fields with no generic counterpart.

    Subclasses set ``protocol`` and ``layout`` (the account layout they were
    read from; several layouts can share one protocol tag), and list their
    Pubkey-typed and raw-bytes fields so the JSON form can be converted back.
    Raw bytes are hex strings in JSON.
    """
    protocol: ClassVar[ProtocolTag] = ""
    layout: ClassVar[str] = ""
    pubkey_fields: ClassVar[tuple[str, ...]] = ()
    bytes_fields: ClassVar[tuple[str, ...]] = ()

    def to_dict(self) -> dict:
        out = {"protocol": protocol_name(self.protocol)}
        if self.layout:
            out["layout"] = self.layout
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in self.pubkey_fields:
                value = _str_or_none(value)
            elif f.name in self.bytes_fields:
                value = value.hex()
            out[f.name] = value
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "LiquidityState":
        kwargs = {}
        for f in fields(cls):
            value = data.get(f.name)
            if f.name in cls.pubkey_fields:
                value = _pubkey_or_none(value)
            elif f.name in cls.bytes_fields:
                value = bytes.fromhex(value)
            kwargs[f.name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class StandardAmmState(LiquidityState):
    """Token-swap fee schedule and curve. Reserves live in the vault accounts."""
    protocol: ClassVar[ProtocolTag] = Protocol.STANDARD_AMM
    layout: ClassVar[str] = "TokenSwapV1"
    pubkey_fields: ClassVar[tuple[str, ...]] = ("token_program_id", "pool_fee_account")
    bytes_fields: ClassVar[tuple[str, ...]] = ("curve_calculator",)

    trade_fee_numerator: int
    trade_fee_denominator: int
    owner_trade_fee_numerator: int
    owner_trade_fee_denominator: int
    owner_withdraw_fee_numerator: int
    owner_withdraw_fee_denominator: int
    host_fee_numerator: int
    host_fee_denominator: int
    curve_type: int
    token_program_id: Pubkey
    pool_fee_account: Pubkey
    bump_seed: int
    # Curve parameters; layout depends on curve_type (price, offset, or unused)
    curve_calculator: bytes = bytes(32)


@dataclass(frozen=True)
class ConstantProductState(LiquidityState):
    """Raydium CPMM pool. Fee rates live in the referenced amm_config account."""
    protocol: ClassVar[ProtocolTag] = Protocol.STANDARD_AMM
    layout: ClassVar[str] = "RaydiumCpmm"
    pubkey_fields: ClassVar[tuple[str, ...]] = (
        "amm_config", "pool_creator", "token_0_program", "token_1_program", "observation_key",
    )
    bytes_fields: ClassVar[tuple[str, ...]] = ("padding",)

    amm_config: Pubkey
    pool_creator: Pubkey
    token_0_program: Pubkey
    token_1_program: Pubkey
    observation_key: Pubkey
    auth_bump: int
    status: int  # bit 0 deposit, bit 1 withdraw, bit 2 swap disabled
    lp_mint_decimals: int
    mint_0_decimals: int
    mint_1_decimals: int
    lp_supply: int
    protocol_fees_token_0: int
    protocol_fees_token_1: int
    fund_fees_token_0: int
    fund_fees_token_1: int
    open_time: int
    recent_epoch: int
    padding: bytes = bytes(248)


@dataclass(frozen=True)
class ConcentratedLiquidityState(LiquidityState):
    protocol: ClassVar[ProtocolTag] = Protocol.CONCENTRATED_LIQUIDITY
    layout: ClassVar[str] = "Whirlpool"
    pubkey_fields: ClassVar[tuple[str, ...]] = ("whirlpools_config",)
    bytes_fields: ClassVar[tuple[str, ...]] = ("fee_tier_index_seed", "reward_infos")

    tick: int
    tick_spacing: int
    sqrt_price_x64: int
    liquidity: int
    fee_rate: int  # hundredths of a basis point
    protocol_fee_rate: int  # basis points of fee_rate
    whirlpools_config: Pubkey
    whirlpool_bump: int = 0
    fee_tier_index_seed: bytes = bytes(2)
    protocol_fee_owed_a: int = 0
    protocol_fee_owed_b: int = 0
    fee_growth_global_a: int = 0
    fee_growth_global_b: int = 0
    reward_last_updated_timestamp: int = 0
    reward_infos: bytes = bytes(384)

    @property
    def raw_price(self) -> float:
        """Quote per base in raw token units (caller adjusts for decimals)."""
        return (self.sqrt_price_x64 / (1 << 64)) ** 2


@dataclass(frozen=True)
class ThirdPartyAmmState(LiquidityState):
    protocol: ClassVar[ProtocolTag] = Protocol.THIRD_PARTY_AMM
    layout: ClassVar[str] = "PumpSwap"
    pubkey_fields: ClassVar[tuple[str, ...]] = ("creator", "coin_creator")

    lp_supply: int
    creator: Pubkey
    index: int
    pool_bump: int
    coin_creator: Optional[Pubkey] = None


LIQUIDITY_STATES: dict[str, type[LiquidityState]] = {
    cls.layout: cls
    for cls in (StandardAmmState, ConstantProductState, ConcentratedLiquidityState, ThirdPartyAmmState)
}


@dataclass(frozen=True)
class UnifiedPool:
    """Decoded pool state, identical in shape across all protocols."""
    protocol: ProtocolTag
    program_id: Pubkey
    base_mint: Pubkey
    quote_mint: Pubkey
    base_vault: Pubkey
    quote_vault: Pubkey
    liquidity_state: LiquidityState
    raw_layout_version: int
    pool_address: Optional[Pubkey] = None
    lp_mint: Optional[Pubkey] = None
    fee_bps: Optional[int] = None

    def __post_init__(self):
        if protocol_name(self.liquidity_state.protocol) != protocol_name(self.protocol):
            raise ValueError(
                f"liquidity_state is {protocol_name(self.liquidity_state.protocol)}, "
                f"pool is {protocol_name(self.protocol)}"
            )

    def to_dict(self) -> dict:
        return {
            "pool_address": _str_or_none(self.pool_address),
            "protocol": protocol_name(self.protocol),
            "program_id": str(self.program_id),
            "base_mint": str(self.base_mint),
            "quote_mint": str(self.quote_mint),
            "base_vault": str(self.base_vault),
            "quote_vault": str(self.quote_vault),
            "lp_mint": _str_or_none(self.lp_mint),
            "fee_bps": self.fee_bps,
            "liquidity_state": self.liquidity_state.to_dict(),
            "raw_layout_version": self.raw_layout_version,
        }

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_dict(cls, data: dict) -> "UnifiedPool":
        state_data = data["liquidity_state"]
        state_cls = LIQUIDITY_STATES.get(state_data.get("layout"))
        if state_cls is None:
            raise ValueError(f"Unknown liquidity_state layout: {state_data.get('layout')}")

        return cls(
            protocol=as_protocol(data["protocol"]),
            program_id=Pubkey.from_string(data["program_id"]),
            base_mint=Pubkey.from_string(data["base_mint"]),
            quote_mint=Pubkey.from_string(data["quote_mint"]),
            base_vault=Pubkey.from_string(data["base_vault"]),
            quote_vault=Pubkey.from_string(data["quote_vault"]),
            liquidity_state=state_cls.from_dict(state_data),
            raw_layout_version=data["raw_layout_version"],
            pool_address=_pubkey_or_none(data.get("pool_address")),
            lp_mint=_pubkey_or_none(data.get("lp_mint")),
            fee_bps=data.get("fee_bps"),
        )
