"""Normalizers — protocol records to UnifiedPool, and back for re-encoding.

Each family gets one normalize_* function (record -> UnifiedPool) and one
encode_*_pool function (UnifiedPool -> account bytes) that writes every field
the pool captures at the offsets the decoder reads. Pools keep reserved and
padding regions as raw bytes, so a decoded account re-encodes byte for byte.
"""

from typing import Optional

from solders.pubkey import Pubkey

from pool_decoder import clmm, pump_amm, raydium_cpmm, standard_amm
from pool_decoder.errors import UninitializedPool
from pool_decoder.models import (
    ConcentratedLiquidityState,
    ConstantProductState,
    Protocol,
    ProtocolTag,
    StandardAmmState,
    ThirdPartyAmmState,
    UnifiedPool,
)

ZERO_KEY = Pubkey.default()

BPS_DENOMINATOR = 10_000
# Whirlpool fee_rate is in hundredths of a basis point (3000 = 0.30%)
WHIRLPOOL_FEE_RATE_PER_BPS = 100


def _require_initialized(protocol: ProtocolTag, **keys: Pubkey):
    for field, key in keys.items():
        if key == ZERO_KEY:
            raise UninitializedPool(field, protocol)


def fee_fraction_to_bps(numerator: int, denominator: int) -> int:
    """Convert a numerator/denominator fee to whole basis points (floored)."""
    if denominator == 0:
        return 0
    return numerator * BPS_DENOMINATOR // denominator


# ── Standard AMM (token swap) ──

def normalize_standard_amm(
    record: standard_amm.SwapV1Record,
    program_id: Pubkey,
    pool_address: Optional[Pubkey] = None,
) -> UnifiedPool:
    protocol = Protocol.STANDARD_AMM
    if not record.is_initialized:
        raise UninitializedPool("is_initialized", protocol)
    _require_initialized(
        protocol,
        base_mint=record.token_a_mint,
        quote_mint=record.token_b_mint,
        base_vault=record.token_a,
        quote_vault=record.token_b,
    )

    return UnifiedPool(
        protocol=protocol,
        program_id=program_id,
        pool_address=pool_address,
        base_mint=record.token_a_mint,
        quote_mint=record.token_b_mint,
        base_vault=record.token_a,
        quote_vault=record.token_b,
        lp_mint=record.pool_mint,
        fee_bps=fee_fraction_to_bps(record.trade_fee_numerator, record.trade_fee_denominator),
        liquidity_state=StandardAmmState(
            trade_fee_numerator=record.trade_fee_numerator,
            trade_fee_denominator=record.trade_fee_denominator,
            owner_trade_fee_numerator=record.owner_trade_fee_numerator,
            owner_trade_fee_denominator=record.owner_trade_fee_denominator,
            owner_withdraw_fee_numerator=record.owner_withdraw_fee_numerator,
            owner_withdraw_fee_denominator=record.owner_withdraw_fee_denominator,
            host_fee_numerator=record.host_fee_numerator,
            host_fee_denominator=record.host_fee_denominator,
            curve_type=record.curve_type,
            token_program_id=record.token_program_id,
            pool_fee_account=record.pool_fee_account,
            bump_seed=record.bump_seed,
            curve_calculator=record.curve_calculator,
        ),
        raw_layout_version=record.version,
    )


def encode_standard_amm_pool(pool: UnifiedPool) -> bytes:
    state = pool.liquidity_state
    return standard_amm.encode(standard_amm.SwapV1Record(
        version=pool.raw_layout_version,
        is_initialized=True,
        bump_seed=state.bump_seed,
        token_program_id=state.token_program_id,
        token_a=pool.base_vault,
        token_b=pool.quote_vault,
        pool_mint=pool.lp_mint if pool.lp_mint is not None else ZERO_KEY,
        token_a_mint=pool.base_mint,
        token_b_mint=pool.quote_mint,
        pool_fee_account=state.pool_fee_account,
        trade_fee_numerator=state.trade_fee_numerator,
        trade_fee_denominator=state.trade_fee_denominator,
        owner_trade_fee_numerator=state.owner_trade_fee_numerator,
        owner_trade_fee_denominator=state.owner_trade_fee_denominator,
        owner_withdraw_fee_numerator=state.owner_withdraw_fee_numerator,
        owner_withdraw_fee_denominator=state.owner_withdraw_fee_denominator,
        host_fee_numerator=state.host_fee_numerator,
        host_fee_denominator=state.host_fee_denominator,
        curve_type=state.curve_type,
        curve_calculator=state.curve_calculator,
    ))


# ── Standard AMM (Raydium CPMM) ──

def normalize_raydium_cpmm(
    record: raydium_cpmm.CpmmPoolRecord,
    program_id: Pubkey,
    pool_address: Optional[Pubkey] = None,
) -> UnifiedPool:
    protocol = Protocol.STANDARD_AMM
    _require_initialized(
        protocol,
        base_mint=record.token_0_mint,
        quote_mint=record.token_1_mint,
        base_vault=record.token_0_vault,
        quote_vault=record.token_1_vault,
    )

    return UnifiedPool(
        protocol=protocol,
        program_id=program_id,
        pool_address=pool_address,
        base_mint=record.token_0_mint,
        quote_mint=record.token_1_mint,
        base_vault=record.token_0_vault,
        quote_vault=record.token_1_vault,
        lp_mint=record.lp_mint,
        fee_bps=None,  # trade_fee_rate is on the AmmConfig account
        liquidity_state=ConstantProductState(
            amm_config=record.amm_config,
            pool_creator=record.pool_creator,
            token_0_program=record.token_0_program,
            token_1_program=record.token_1_program,
            observation_key=record.observation_key,
            auth_bump=record.auth_bump,
            status=record.status,
            lp_mint_decimals=record.lp_mint_decimals,
            mint_0_decimals=record.mint_0_decimals,
            mint_1_decimals=record.mint_1_decimals,
            lp_supply=record.lp_supply,
            protocol_fees_token_0=record.protocol_fees_token_0,
            protocol_fees_token_1=record.protocol_fees_token_1,
            fund_fees_token_0=record.fund_fees_token_0,
            fund_fees_token_1=record.fund_fees_token_1,
            open_time=record.open_time,
            recent_epoch=record.recent_epoch,
            padding=record.padding,
        ),
        raw_layout_version=record.version,
    )


def encode_raydium_cpmm_pool(pool: UnifiedPool) -> bytes:
    state = pool.liquidity_state
    return raydium_cpmm.encode(raydium_cpmm.CpmmPoolRecord(
        version=pool.raw_layout_version,
        amm_config=state.amm_config,
        pool_creator=state.pool_creator,
        token_0_vault=pool.base_vault,
        token_1_vault=pool.quote_vault,
        lp_mint=pool.lp_mint if pool.lp_mint is not None else ZERO_KEY,
        token_0_mint=pool.base_mint,
        token_1_mint=pool.quote_mint,
        token_0_program=state.token_0_program,
        token_1_program=state.token_1_program,
        observation_key=state.observation_key,
        auth_bump=state.auth_bump,
        status=state.status,
        lp_mint_decimals=state.lp_mint_decimals,
        mint_0_decimals=state.mint_0_decimals,
        mint_1_decimals=state.mint_1_decimals,
        lp_supply=state.lp_supply,
        protocol_fees_token_0=state.protocol_fees_token_0,
        protocol_fees_token_1=state.protocol_fees_token_1,
        fund_fees_token_0=state.fund_fees_token_0,
        fund_fees_token_1=state.fund_fees_token_1,
        open_time=state.open_time,
        recent_epoch=state.recent_epoch,
        padding=state.padding,
    ))


# ── Concentrated liquidity (Whirlpool) ──

def normalize_clmm(
    record: clmm.WhirlpoolRecord,
    program_id: Pubkey,
    pool_address: Optional[Pubkey] = None,
) -> UnifiedPool:
    protocol = Protocol.CONCENTRATED_LIQUIDITY
    _require_initialized(
        protocol,
        base_mint=record.token_mint_a,
        quote_mint=record.token_mint_b,
        base_vault=record.token_vault_a,
        quote_vault=record.token_vault_b,
    )

    return UnifiedPool(
        protocol=protocol,
        program_id=program_id,
        pool_address=pool_address,
        base_mint=record.token_mint_a,
        quote_mint=record.token_mint_b,
        base_vault=record.token_vault_a,
        quote_vault=record.token_vault_b,
        lp_mint=None,
        fee_bps=record.fee_rate // WHIRLPOOL_FEE_RATE_PER_BPS,
        liquidity_state=ConcentratedLiquidityState(
            tick=record.tick_current_index,
            tick_spacing=record.tick_spacing,
            sqrt_price_x64=record.sqrt_price,
            liquidity=record.liquidity,
            fee_rate=record.fee_rate,
            protocol_fee_rate=record.protocol_fee_rate,
            whirlpools_config=record.whirlpools_config,
            whirlpool_bump=record.whirlpool_bump,
            fee_tier_index_seed=record.fee_tier_index_seed,
            protocol_fee_owed_a=record.protocol_fee_owed_a,
            protocol_fee_owed_b=record.protocol_fee_owed_b,
            fee_growth_global_a=record.fee_growth_global_a,
            fee_growth_global_b=record.fee_growth_global_b,
            reward_last_updated_timestamp=record.reward_last_updated_timestamp,
            reward_infos=record.reward_infos,
        ),
        raw_layout_version=record.version,
    )


def encode_clmm_pool(pool: UnifiedPool) -> bytes:
    state = pool.liquidity_state
    return clmm.encode(clmm.WhirlpoolRecord(
        version=pool.raw_layout_version,
        whirlpools_config=state.whirlpools_config,
        whirlpool_bump=state.whirlpool_bump,
        tick_spacing=state.tick_spacing,
        fee_tier_index_seed=state.fee_tier_index_seed,
        fee_rate=state.fee_rate,
        protocol_fee_rate=state.protocol_fee_rate,
        liquidity=state.liquidity,
        sqrt_price=state.sqrt_price_x64,
        tick_current_index=state.tick,
        protocol_fee_owed_a=state.protocol_fee_owed_a,
        protocol_fee_owed_b=state.protocol_fee_owed_b,
        token_mint_a=pool.base_mint,
        token_vault_a=pool.base_vault,
        fee_growth_global_a=state.fee_growth_global_a,
        token_mint_b=pool.quote_mint,
        token_vault_b=pool.quote_vault,
        fee_growth_global_b=state.fee_growth_global_b,
        reward_last_updated_timestamp=state.reward_last_updated_timestamp,
        reward_infos=state.reward_infos,
    ))


# ── Third-party AMM (PumpSwap) ──

def normalize_pump_amm(
    record: pump_amm.PumpPoolRecord,
    program_id: Pubkey,
    pool_address: Optional[Pubkey] = None,
) -> UnifiedPool:
    protocol = Protocol.THIRD_PARTY_AMM
    _require_initialized(
        protocol,
        base_mint=record.base_mint,
        quote_mint=record.quote_mint,
        base_vault=record.pool_base_token_account,
        quote_vault=record.pool_quote_token_account,
    )

    return UnifiedPool(
        protocol=protocol,
        program_id=program_id,
        pool_address=pool_address,
        base_mint=record.base_mint,
        quote_mint=record.quote_mint,
        base_vault=record.pool_base_token_account,
        quote_vault=record.pool_quote_token_account,
        lp_mint=record.lp_mint,
        fee_bps=None,
        liquidity_state=ThirdPartyAmmState(
            lp_supply=record.lp_supply,
            creator=record.creator,
            index=record.index,
            pool_bump=record.pool_bump,
            coin_creator=record.coin_creator,
        ),
        raw_layout_version=record.version,
    )


def encode_pump_amm_pool(pool: UnifiedPool) -> bytes:
    state = pool.liquidity_state
    return pump_amm.encode(pump_amm.PumpPoolRecord(
        version=pool.raw_layout_version,
        pool_bump=state.pool_bump,
        index=state.index,
        creator=state.creator,
        base_mint=pool.base_mint,
        quote_mint=pool.quote_mint,
        lp_mint=pool.lp_mint if pool.lp_mint is not None else ZERO_KEY,
        pool_base_token_account=pool.base_vault,
        pool_quote_token_account=pool.quote_vault,
        lp_supply=state.lp_supply,
        coin_creator=state.coin_creator,
    ))
