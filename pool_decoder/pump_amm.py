"""Third-party AMM — Pump.fun AMM (PumpSwap) Pool layout.

Program: pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA

Same building blocks as the standard AMM (mints, vaults, LP mint) but a
different discriminator and field order. Fee rates live in the program's
GlobalConfig account, not in the pool.

Pool layout (borsh):
# offset   0: Anchor discriminator (8)
# offset   8: pool_bump (u8)
# offset   9: index (u16)
# offset  11: creator (Pubkey, 32)
# offset  43: base_mint (Pubkey, 32)
# offset  75: quote_mint (Pubkey, 32)
# offset 107: lp_mint (Pubkey, 32)
# offset 139: pool_base_token_account (Pubkey, 32)
# offset 171: pool_quote_token_account (Pubkey, 32)
# offset 203: lp_supply (u64)
# -- v1 ends at 211 --
# offset 211: coin_creator (Pubkey, 32)
# -- v2 ends at 243 --
"""

from dataclasses import dataclass
from typing import Optional

from solders.pubkey import Pubkey

from pool_decoder.layout import (
    LayoutVersion,
    anchor_account_discriminator,
    read_pubkey,
    read_u8,
    read_u16,
    read_u64,
    select_layout,
    write_bytes,
    write_pubkey,
    write_u8,
    write_u16,
    write_u64,
)
from pool_decoder.models import Protocol

POOL_DISCRIMINATOR = anchor_account_discriminator("Pool")
POOL_V1 = LayoutVersion(discriminator=POOL_DISCRIMINATOR, version=1, size=211)
LAYOUT_VERSIONS = (POOL_V1,)

# The program reallocated pools in place to append coin_creator, keeping the
# discriminator. The extension is read whenever the account is long enough.
COIN_CREATOR_OFFSET = 211
POOL_V2_VERSION = 2
POOL_V2_SIZE = 243


@dataclass(frozen=True)
class PumpPoolRecord:
    version: int
    pool_bump: int
    index: int
    creator: Pubkey
    base_mint: Pubkey
    quote_mint: Pubkey
    lp_mint: Pubkey
    pool_base_token_account: Pubkey
    pool_quote_token_account: Pubkey
    lp_supply: int
    coin_creator: Optional[Pubkey] = None


def decode(data: bytes) -> PumpPoolRecord:
    """Decode a PumpSwap pool account. Raises DecodeError on bad input."""
    layout = select_layout(data, LAYOUT_VERSIONS, Protocol.THIRD_PARTY_AMM)

    version = layout.version
    coin_creator = None
    if len(data) >= POOL_V2_SIZE:
        version = POOL_V2_VERSION
        coin_creator = read_pubkey(data, COIN_CREATOR_OFFSET)

    return PumpPoolRecord(
        version=version,
        pool_bump=read_u8(data, 8),
        index=read_u16(data, 9),
        creator=read_pubkey(data, 11),
        base_mint=read_pubkey(data, 43),
        quote_mint=read_pubkey(data, 75),
        lp_mint=read_pubkey(data, 107),
        pool_base_token_account=read_pubkey(data, 139),
        pool_quote_token_account=read_pubkey(data, 171),
        lp_supply=read_u64(data, 203),
        coin_creator=coin_creator,
    )


def encode(record: PumpPoolRecord) -> bytes:
    """Inverse of decode(): v1 records encode to 211 bytes, v2 to 243."""
    size = POOL_V2_SIZE if record.coin_creator is not None else POOL_V1.size
    buf = bytearray(size)
    write_bytes(buf, 0, POOL_DISCRIMINATOR)
    write_u8(buf, 8, record.pool_bump)
    write_u16(buf, 9, record.index)
    write_pubkey(buf, 11, record.creator)
    write_pubkey(buf, 43, record.base_mint)
    write_pubkey(buf, 75, record.quote_mint)
    write_pubkey(buf, 107, record.lp_mint)
    write_pubkey(buf, 139, record.pool_base_token_account)
    write_pubkey(buf, 171, record.pool_quote_token_account)
    write_u64(buf, 203, record.lp_supply)
    if record.coin_creator is not None:
        write_pubkey(buf, COIN_CREATOR_OFFSET, record.coin_creator)
    return bytes(buf)
