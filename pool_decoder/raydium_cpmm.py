"""Constant-product AMM — Raydium CPMM PoolState layout.

Program: CPMMoo8L3F4NbTegBCKVNunggL7H1ZpdTHKxQB5qKP8C

PoolState account layout (borsh, 637 bytes):
# offset   0: Anchor discriminator (8)
# offset   8: amm_config (Pubkey, 32)
# offset  40: pool_creator (Pubkey, 32)
# offset  72: token_0_vault (Pubkey, 32)
# offset 104: token_1_vault (Pubkey, 32)
# offset 136: lp_mint (Pubkey, 32)
# offset 168: token_0_mint (Pubkey, 32)
# offset 200: token_1_mint (Pubkey, 32)
# offset 232: token_0_program (Pubkey, 32)
# offset 264: token_1_program (Pubkey, 32)
# offset 296: observation_key (Pubkey, 32)
# offset 328: auth_bump (u8)
# offset 329: status (u8)
# offset 330: lp_mint_decimals (u8)
# offset 331: mint_0_decimals (u8)
# offset 332: mint_1_decimals (u8)
# offset 333: lp_supply (u64)
# offset 341: protocol_fees_token_0 (u64)
# offset 349: protocol_fees_token_1 (u64)
# offset 357: fund_fees_token_0 (u64)
# offset 365: fund_fees_token_1 (u64)
# offset 373: open_time (u64)
# offset 381: recent_epoch (u64)
# offset 389: padding (u64[31])

Trade fee rates are in the AmmConfig account named by amm_config; reserves are
the vault balances minus accrued protocol and fund fees.
"""

from dataclasses import dataclass

from solders.pubkey import Pubkey

from pool_decoder.layout import (
    LayoutVersion,
    anchor_account_discriminator,
    read_bytes,
    read_pubkey,
    read_u8,
    read_u64,
    select_layout,
    write_bytes,
    write_pubkey,
    write_u8,
    write_u64,
)
from pool_decoder.models import Protocol

POOL_STATE_DISCRIMINATOR = anchor_account_discriminator("PoolState")
POOL_STATE_V1 = LayoutVersion(discriminator=POOL_STATE_DISCRIMINATOR, version=1, size=637)
LAYOUT_VERSIONS = (POOL_STATE_V1,)

PADDING_OFFSET = 389
PADDING_LEN = 31 * 8


@dataclass(frozen=True)
class CpmmPoolRecord:
    version: int
    amm_config: Pubkey
    pool_creator: Pubkey
    token_0_vault: Pubkey
    token_1_vault: Pubkey
    lp_mint: Pubkey
    token_0_mint: Pubkey
    token_1_mint: Pubkey
    token_0_program: Pubkey
    token_1_program: Pubkey
    observation_key: Pubkey
    auth_bump: int
    status: int
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
    padding: bytes = bytes(PADDING_LEN)


def decode(data: bytes) -> CpmmPoolRecord:
    """Decode a Raydium CPMM pool account. Raises DecodeError on bad input."""
    layout = select_layout(data, LAYOUT_VERSIONS, Protocol.STANDARD_AMM)

    return CpmmPoolRecord(
        version=layout.version,
        amm_config=read_pubkey(data, 8),
        pool_creator=read_pubkey(data, 40),
        token_0_vault=read_pubkey(data, 72),
        token_1_vault=read_pubkey(data, 104),
        lp_mint=read_pubkey(data, 136),
        token_0_mint=read_pubkey(data, 168),
        token_1_mint=read_pubkey(data, 200),
        token_0_program=read_pubkey(data, 232),
        token_1_program=read_pubkey(data, 264),
        observation_key=read_pubkey(data, 296),
        auth_bump=read_u8(data, 328),
        status=read_u8(data, 329),
        lp_mint_decimals=read_u8(data, 330),
        mint_0_decimals=read_u8(data, 331),
        mint_1_decimals=read_u8(data, 332),
        lp_supply=read_u64(data, 333),
        protocol_fees_token_0=read_u64(data, 341),
        protocol_fees_token_1=read_u64(data, 349),
        fund_fees_token_0=read_u64(data, 357),
        fund_fees_token_1=read_u64(data, 365),
        open_time=read_u64(data, 373),
        recent_epoch=read_u64(data, 381),
        padding=read_bytes(data, PADDING_OFFSET, PADDING_LEN),
    )


def encode(record: CpmmPoolRecord) -> bytes:
    """Inverse of decode(): serialize a record back to its account bytes."""
    buf = bytearray(POOL_STATE_V1.size)
    write_bytes(buf, 0, POOL_STATE_DISCRIMINATOR)
    write_pubkey(buf, 8, record.amm_config)
    write_pubkey(buf, 40, record.pool_creator)
    write_pubkey(buf, 72, record.token_0_vault)
    write_pubkey(buf, 104, record.token_1_vault)
    write_pubkey(buf, 136, record.lp_mint)
    write_pubkey(buf, 168, record.token_0_mint)
    write_pubkey(buf, 200, record.token_1_mint)
    write_pubkey(buf, 232, record.token_0_program)
    write_pubkey(buf, 264, record.token_1_program)
    write_pubkey(buf, 296, record.observation_key)
    write_u8(buf, 328, record.auth_bump)
    write_u8(buf, 329, record.status)
    write_u8(buf, 330, record.lp_mint_decimals)
    write_u8(buf, 331, record.mint_0_decimals)
    write_u8(buf, 332, record.mint_1_decimals)
    write_u64(buf, 333, record.lp_supply)
    write_u64(buf, 341, record.protocol_fees_token_0)
    write_u64(buf, 349, record.protocol_fees_token_1)
    write_u64(buf, 357, record.fund_fees_token_0)
    write_u64(buf, 365, record.fund_fees_token_1)
    write_u64(buf, 373, record.open_time)
    write_u64(buf, 381, record.recent_epoch)
    write_bytes(buf, PADDING_OFFSET, record.padding[:PADDING_LEN])
    return bytes(buf)
