"""Concentrated-liquidity AMM — Orca Whirlpool layout.

Program: whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc

Whirlpool account layout (borsh, 653 bytes):
# offset   0: Anchor discriminator (8)
# offset   8: whirlpools_config (Pubkey, 32)
# offset  40: whirlpool_bump (u8)
# offset  41: tick_spacing (u16)
# offset  43: fee_tier_index_seed (u8[2])
# offset  45: fee_rate (u16): hundredths of a bps
# offset  47: protocol_fee_rate (u16)
# offset  49: liquidity (u128, 16)
# offset  65: sqrt_price (u128, 16): Q64.64
# offset  81: tick_current_index (i32)
# offset  85: protocol_fee_owed_a (u64)
# offset  93: protocol_fee_owed_b (u64)
# offset 101: token_mint_a (Pubkey, 32)
# offset 133: token_vault_a (Pubkey, 32)
# offset 165: fee_growth_global_a (u128, 16)
# offset 181: token_mint_b (Pubkey, 32)
# offset 213: token_vault_b (Pubkey, 32)
# offset 245: fee_growth_global_b (u128, 16)
# offset 261: reward_last_updated_timestamp (u64)
# offset 269: reward_infos (3 x 128)

Reserves are not stored here; they are the vault token balances.
"""

from dataclasses import dataclass

from solders.pubkey import Pubkey

from pool_decoder.layout import (
    LayoutVersion,
    anchor_account_discriminator,
    read_bytes,
    read_i32,
    read_pubkey,
    read_u8,
    read_u16,
    read_u64,
    read_u128,
    select_layout,
    write_bytes,
    write_i32,
    write_pubkey,
    write_u8,
    write_u16,
    write_u64,
    write_u128,
)
from pool_decoder.models import Protocol

WHIRLPOOL_DISCRIMINATOR = anchor_account_discriminator("Whirlpool")
WHIRLPOOL_V1 = LayoutVersion(discriminator=WHIRLPOOL_DISCRIMINATOR, version=1, size=653)
LAYOUT_VERSIONS = (WHIRLPOOL_V1,)

REWARD_INFOS_OFFSET = 269
REWARD_INFOS_LEN = 3 * 128


@dataclass(frozen=True)
class WhirlpoolRecord:
    version: int
    whirlpools_config: Pubkey
    whirlpool_bump: int
    tick_spacing: int
    fee_tier_index_seed: bytes
    fee_rate: int
    protocol_fee_rate: int
    liquidity: int
    sqrt_price: int
    tick_current_index: int
    protocol_fee_owed_a: int
    protocol_fee_owed_b: int
    token_mint_a: Pubkey
    token_vault_a: Pubkey
    fee_growth_global_a: int
    token_mint_b: Pubkey
    token_vault_b: Pubkey
    fee_growth_global_b: int
    reward_last_updated_timestamp: int
    reward_infos: bytes = bytes(REWARD_INFOS_LEN)


def decode(data: bytes) -> WhirlpoolRecord:
    """Decode a Whirlpool account. Raises DecodeError on bad input."""
    layout = select_layout(data, LAYOUT_VERSIONS, Protocol.CONCENTRATED_LIQUIDITY)

    return WhirlpoolRecord(
        version=layout.version,
        whirlpools_config=read_pubkey(data, 8),
        whirlpool_bump=read_u8(data, 40),
        tick_spacing=read_u16(data, 41),
        fee_tier_index_seed=read_bytes(data, 43, 2),
        fee_rate=read_u16(data, 45),
        protocol_fee_rate=read_u16(data, 47),
        liquidity=read_u128(data, 49),
        sqrt_price=read_u128(data, 65),
        tick_current_index=read_i32(data, 81),
        protocol_fee_owed_a=read_u64(data, 85),
        protocol_fee_owed_b=read_u64(data, 93),
        token_mint_a=read_pubkey(data, 101),
        token_vault_a=read_pubkey(data, 133),
        fee_growth_global_a=read_u128(data, 165),
        token_mint_b=read_pubkey(data, 181),
        token_vault_b=read_pubkey(data, 213),
        fee_growth_global_b=read_u128(data, 245),
        reward_last_updated_timestamp=read_u64(data, 261),
        reward_infos=read_bytes(data, REWARD_INFOS_OFFSET, REWARD_INFOS_LEN),
    )


def encode(record: WhirlpoolRecord) -> bytes:
    """Inverse of decode(): serialize a record back to its account bytes."""
    buf = bytearray(WHIRLPOOL_V1.size)
    write_bytes(buf, 0, WHIRLPOOL_V1.discriminator)
    write_pubkey(buf, 8, record.whirlpools_config)
    write_u8(buf, 40, record.whirlpool_bump)
    write_u16(buf, 41, record.tick_spacing)
    write_bytes(buf, 43, record.fee_tier_index_seed[:2])
    write_u16(buf, 45, record.fee_rate)
    write_u16(buf, 47, record.protocol_fee_rate)
    write_u128(buf, 49, record.liquidity)
    write_u128(buf, 65, record.sqrt_price)
    write_i32(buf, 81, record.tick_current_index)
    write_u64(buf, 85, record.protocol_fee_owed_a)
    write_u64(buf, 93, record.protocol_fee_owed_b)
    write_pubkey(buf, 101, record.token_mint_a)
    write_pubkey(buf, 133, record.token_vault_a)
    write_u128(buf, 165, record.fee_growth_global_a)
    write_pubkey(buf, 181, record.token_mint_b)
    write_pubkey(buf, 213, record.token_vault_b)
    write_u128(buf, 245, record.fee_growth_global_b)
    write_u64(buf, 261, record.reward_last_updated_timestamp)
    write_bytes(buf, REWARD_INFOS_OFFSET, record.reward_infos[:REWARD_INFOS_LEN])
    return bytes(buf)
