"""Shared fixtures: hand-built account bytes for each supported layout."""

import struct
from types import SimpleNamespace

import pytest
from solders.pubkey import Pubkey

from pool_decoder.clmm import WHIRLPOOL_DISCRIMINATOR
from pool_decoder.pump_amm import POOL_DISCRIMINATOR
from pool_decoder.raydium_cpmm import POOL_STATE_DISCRIMINATOR
from pool_decoder.registry import ProtocolRegistry, register_builtin_protocols


def _key(byte: int) -> Pubkey:
    return Pubkey.from_bytes(bytes([byte]) * 32)


KEYS = SimpleNamespace(
    mint_a=_key(0xA1),
    mint_b=_key(0xB2),
    vault_a=_key(0x03),
    vault_b=_key(0x04),
    lp_mint=_key(0x05),
    fee_account=_key(0x06),
    config=_key(0x07),
    creator=_key(0x08),
    token_program=_key(0x09),
    coin_creator=_key(0x0A),
    pool=_key(0x0B),
    amm_config=_key(0x0C),
    observation=_key(0x0D),
)

SQRT_PRICE_X64 = 2 << 64  # raw price 4.0
LIQUIDITY = 123_456_789_012_345_678_901_234


def build_standard_amm_data(curve_type: int = 0) -> bytes:
    """SwapV1 account (324 bytes): 25/10000 trade fee, constant product by default."""
    buf = bytearray(324)
    buf[0] = 1  # SwapVersion::SwapV1
    buf[1] = 1  # is_initialized
    buf[2] = 255  # bump_seed
    buf[3:35] = bytes(KEYS.token_program)
    buf[35:67] = bytes(KEYS.vault_a)
    buf[67:99] = bytes(KEYS.vault_b)
    buf[99:131] = bytes(KEYS.lp_mint)
    buf[131:163] = bytes(KEYS.mint_a)
    buf[163:195] = bytes(KEYS.mint_b)
    buf[195:227] = bytes(KEYS.fee_account)
    # trade, owner_trade, owner_withdraw, host
    struct.pack_into("<8Q", buf, 227, 25, 10_000, 5, 10_000, 0, 0, 20, 100)
    buf[291] = curve_type  # 0 ConstantProduct, 2 Offset
    buf[292:324] = bytes([0x07]) * 32  # calculator region
    return bytes(buf)


def build_raydium_cpmm_data() -> bytes:
    """Raydium CPMM PoolState account (637 bytes), swaps enabled."""
    buf = bytearray(637)
    buf[0:8] = POOL_STATE_DISCRIMINATOR
    buf[8:40] = bytes(KEYS.amm_config)
    buf[40:72] = bytes(KEYS.creator)
    buf[72:104] = bytes(KEYS.vault_a)
    buf[104:136] = bytes(KEYS.vault_b)
    buf[136:168] = bytes(KEYS.lp_mint)
    buf[168:200] = bytes(KEYS.mint_a)
    buf[200:232] = bytes(KEYS.mint_b)
    buf[232:264] = bytes(KEYS.token_program)
    buf[264:296] = bytes(KEYS.token_program)
    buf[296:328] = bytes(KEYS.observation)
    struct.pack_into("<5B", buf, 328, 250, 0, 9, 6, 9)  # auth_bump, status, decimals
    struct.pack_into("<7Q", buf, 333, 5_000_000_000, 100, 200, 30, 40, 1_700_000_000, 612)
    buf[389:637] = bytes([0x01]) * 248  # padding
    return bytes(buf)


def build_clmm_data() -> bytes:
    """Whirlpool account (653 bytes): tick -120, tick_spacing 10, 0.30% fee."""
    buf = bytearray(653)
    buf[0:8] = WHIRLPOOL_DISCRIMINATOR
    buf[8:40] = bytes(KEYS.config)
    buf[40] = 254  # whirlpool_bump
    struct.pack_into("<H", buf, 41, 10)  # tick_spacing
    buf[43:45] = b"\x0a\x00"  # fee_tier_index_seed
    struct.pack_into("<H", buf, 45, 3000)  # fee_rate
    struct.pack_into("<H", buf, 47, 1300)  # protocol_fee_rate
    struct.pack_into("<QQ", buf, 49, LIQUIDITY & (2**64 - 1), LIQUIDITY >> 64)
    struct.pack_into("<QQ", buf, 65, SQRT_PRICE_X64 & (2**64 - 1), SQRT_PRICE_X64 >> 64)
    struct.pack_into("<i", buf, 81, -120)
    struct.pack_into("<QQ", buf, 85, 11, 22)  # protocol_fee_owed_a/b
    buf[101:133] = bytes(KEYS.mint_a)
    buf[133:165] = bytes(KEYS.vault_a)
    struct.pack_into("<QQ", buf, 165, 999, 0)
    buf[181:213] = bytes(KEYS.mint_b)
    buf[213:245] = bytes(KEYS.vault_b)
    struct.pack_into("<QQ", buf, 245, 888, 0)
    struct.pack_into("<Q", buf, 261, 1_700_000_000)
    buf[269:653] = bytes([0x05]) * 384  # reward_infos
    return bytes(buf)


def build_pump_amm_data(with_coin_creator: bool = True) -> bytes:
    """PumpSwap Pool account: 243 bytes (v2) or 211 bytes (v1)."""
    buf = bytearray(243 if with_coin_creator else 211)
    buf[0:8] = POOL_DISCRIMINATOR
    buf[8] = 253  # pool_bump
    struct.pack_into("<H", buf, 9, 0)  # index
    buf[11:43] = bytes(KEYS.creator)
    buf[43:75] = bytes(KEYS.mint_a)
    buf[75:107] = bytes(KEYS.mint_b)
    buf[107:139] = bytes(KEYS.lp_mint)
    buf[139:171] = bytes(KEYS.vault_a)
    buf[171:203] = bytes(KEYS.vault_b)
    struct.pack_into("<Q", buf, 203, 4_193_388_043)
    if with_coin_creator:
        buf[211:243] = bytes(KEYS.coin_creator)
    return bytes(buf)


@pytest.fixture
def keys() -> SimpleNamespace:
    return KEYS


@pytest.fixture
def standard_amm_data() -> bytes:
    return build_standard_amm_data()


@pytest.fixture
def offset_curve_data() -> bytes:
    return build_standard_amm_data(curve_type=2)


@pytest.fixture
def raydium_cpmm_data() -> bytes:
    return build_raydium_cpmm_data()


@pytest.fixture
def clmm_data() -> bytes:
    return build_clmm_data()


@pytest.fixture
def pump_amm_data() -> bytes:
    return build_pump_amm_data()


@pytest.fixture
def pump_amm_v1_data() -> bytes:
    return build_pump_amm_data(with_coin_creator=False)


@pytest.fixture
def registry() -> ProtocolRegistry:
    """Fresh registry with the built-ins, isolated from default_registry."""
    return register_builtin_protocols(ProtocolRegistry())


@pytest.fixture
def clmm_values() -> SimpleNamespace:
    return SimpleNamespace(liquidity=LIQUIDITY, sqrt_price_x64=SQRT_PRICE_X64)
