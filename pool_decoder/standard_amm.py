"""Standard constant-product AMM — SPL Token Swap layout.

Used by Orca Token Swap v2 (9W959DqEETiGZocYWCQPaJ6sBmUzgfxXfqGeTEdp3aQP) and
the reference SPL Token Swap program. The account starts with a one-byte
SwapVersion tag instead of an Anchor discriminator.

SwapV1 layout (324 bytes):
# offset   0: version (u8): 1 = SwapV1
# offset   1: is_initialized (bool)
# offset   2: bump_seed (u8)
# offset   3: token_program_id (Pubkey, 32)
# offset  35: token_a: vault (Pubkey, 32)
# offset  67: token_b: vault (Pubkey, 32)
# offset  99: pool_mint: LP mint (Pubkey, 32)
# offset 131: token_a_mint (Pubkey, 32)
# offset 163: token_b_mint (Pubkey, 32)
# offset 195: pool_fee_account (Pubkey, 32)
# offset 227: fees: 8 x u64 numerator/denominator pairs
#             trade, owner_trade, owner_withdraw, host
# offset 291: curve_type (u8)
# offset 292: curve calculator (32 bytes, meaning depends on curve_type)
"""

from dataclasses import dataclass

from solders.pubkey import Pubkey

from pool_decoder.layout import (
    LayoutVersion,
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

SWAP_V1 = LayoutVersion(discriminator=bytes([1]), version=1, size=324)
LAYOUT_VERSIONS = (SWAP_V1,)

CALCULATOR_OFFSET = 292
CALCULATOR_LEN = 32


@dataclass(frozen=True)
class SwapV1Record:
    version: int
    is_initialized: bool
    bump_seed: int
    token_program_id: Pubkey
    token_a: Pubkey
    token_b: Pubkey
    pool_mint: Pubkey
    token_a_mint: Pubkey
    token_b_mint: Pubkey
    pool_fee_account: Pubkey
    trade_fee_numerator: int
    trade_fee_denominator: int
    owner_trade_fee_numerator: int
    owner_trade_fee_denominator: int
    owner_withdraw_fee_numerator: int
    owner_withdraw_fee_denominator: int
    host_fee_numerator: int
    host_fee_denominator: int
    curve_type: int
    curve_calculator: bytes = bytes(CALCULATOR_LEN)


def decode(data: bytes) -> SwapV1Record:
    """Decode a token-swap state account. Raises DecodeError on bad input."""
    layout = select_layout(data, LAYOUT_VERSIONS, Protocol.STANDARD_AMM)

    return SwapV1Record(
        version=layout.version,
        is_initialized=read_u8(data, 1) != 0,
        bump_seed=read_u8(data, 2),
        token_program_id=read_pubkey(data, 3),
        token_a=read_pubkey(data, 35),
        token_b=read_pubkey(data, 67),
        pool_mint=read_pubkey(data, 99),
        token_a_mint=read_pubkey(data, 131),
        token_b_mint=read_pubkey(data, 163),
        pool_fee_account=read_pubkey(data, 195),
        trade_fee_numerator=read_u64(data, 227),
        trade_fee_denominator=read_u64(data, 235),
        owner_trade_fee_numerator=read_u64(data, 243),
        owner_trade_fee_denominator=read_u64(data, 251),
        owner_withdraw_fee_numerator=read_u64(data, 259),
        owner_withdraw_fee_denominator=read_u64(data, 267),
        host_fee_numerator=read_u64(data, 275),
        host_fee_denominator=read_u64(data, 283),
        curve_type=read_u8(data, 291),
        curve_calculator=read_bytes(data, CALCULATOR_OFFSET, CALCULATOR_LEN),
    )


def encode(record: SwapV1Record) -> bytes:
    """Inverse of decode(): serialize a record back to its account bytes."""
    buf = bytearray(SWAP_V1.size)
    write_bytes(buf, 0, SWAP_V1.discriminator)
    write_u8(buf, 1, 1 if record.is_initialized else 0)
    write_u8(buf, 2, record.bump_seed)
    write_pubkey(buf, 3, record.token_program_id)
    write_pubkey(buf, 35, record.token_a)
    write_pubkey(buf, 67, record.token_b)
    write_pubkey(buf, 99, record.pool_mint)
    write_pubkey(buf, 131, record.token_a_mint)
    write_pubkey(buf, 163, record.token_b_mint)
    write_pubkey(buf, 195, record.pool_fee_account)
    write_u64(buf, 227, record.trade_fee_numerator)
    write_u64(buf, 235, record.trade_fee_denominator)
    write_u64(buf, 243, record.owner_trade_fee_numerator)
    write_u64(buf, 251, record.owner_trade_fee_denominator)
    write_u64(buf, 259, record.owner_withdraw_fee_numerator)
    write_u64(buf, 267, record.owner_withdraw_fee_denominator)
    write_u64(buf, 275, record.host_fee_numerator)
    write_u64(buf, 283, record.host_fee_denominator)
    write_u8(buf, 291, record.curve_type)
    write_bytes(buf, CALCULATOR_OFFSET, record.curve_calculator[:CALCULATOR_LEN])
    return bytes(buf)
