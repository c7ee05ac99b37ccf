"""On-chain program ids of the built-in protocols."""

from typing import Union

from solders.pubkey import Pubkey

# ── Program IDs ──

ORCA_TOKEN_SWAP_V2_PROGRAM = Pubkey.from_string("9W959DqEETiGZocYWCQPaJ6sBmUzgfxXfqGeTEdp3aQP")
SPL_TOKEN_SWAP_PROGRAM = Pubkey.from_string("SwapsVeCiPHMUAtzQWZw7RjsKjgCjhwU55QGu4U1Szw")
RAYDIUM_CPMM_PROGRAM = Pubkey.from_string("CPMMoo8L3F4NbTegBCKVNunggL7H1ZpdTHKxQB5qKP8C")
ORCA_WHIRLPOOL_PROGRAM = Pubkey.from_string("whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc")
PUMP_AMM_PROGRAM = Pubkey.from_string("pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA")

ProgramIdLike = Union[Pubkey, str, bytes]


def to_pubkey(value: ProgramIdLike) -> Pubkey:
    """Accept a Pubkey, base58 string or 32 raw bytes."""
    if isinstance(value, Pubkey):
        return value
    if isinstance(value, str):
        return Pubkey.from_string(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        if len(raw) != 32:
            raise ValueError(f"Expected 32-byte key, got {len(raw)} bytes")
        return Pubkey.from_bytes(raw)
    raise TypeError(f"Cannot convert {type(value).__name__} to Pubkey")
