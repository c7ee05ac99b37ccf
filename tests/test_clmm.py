"""Test the Whirlpool (concentrated liquidity) layout decoder."""

import pytest

from pool_decoder import clmm
from pool_decoder.errors import TruncatedAccount, UnknownLayoutVersion
from pool_decoder.pump_amm import POOL_DISCRIMINATOR


def test_decode_valid_whirlpool(clmm_data, keys, clmm_values):
    record = clmm.decode(clmm_data)
    assert record.version == 1
    assert record.whirlpools_config == keys.config
    assert record.whirlpool_bump == 254
    assert record.tick_spacing == 10
    assert record.fee_tier_index_seed == b"\x0a\x00"
    assert record.fee_rate == 3000
    assert record.protocol_fee_rate == 1300
    assert record.liquidity == clmm_values.liquidity
    assert record.sqrt_price == clmm_values.sqrt_price_x64
    assert record.tick_current_index == -120
    assert record.protocol_fee_owed_a == 11
    assert record.protocol_fee_owed_b == 22
    assert record.token_mint_a == keys.mint_a
    assert record.token_vault_a == keys.vault_a
    assert record.fee_growth_global_a == 999
    assert record.token_mint_b == keys.mint_b
    assert record.token_vault_b == keys.vault_b
    assert record.fee_growth_global_b == 888
    assert record.reward_last_updated_timestamp == 1_700_000_000


def test_decode_one_byte_short(clmm_data):
    with pytest.raises(TruncatedAccount) as exc:
        clmm.decode(clmm_data[:-1])
    assert exc.value.required == 653
    assert exc.value.actual == 652


def test_decode_rejects_other_protocol_discriminator(clmm_data):
    data = POOL_DISCRIMINATOR + clmm_data[8:]
    with pytest.raises(UnknownLayoutVersion) as exc:
        clmm.decode(data)
    assert exc.value.discriminator == POOL_DISCRIMINATOR


def test_encode_reproduces_account_bytes(clmm_data):
    # reward_infos are non-zero in the fixture and must survive
    assert clmm.encode(clmm.decode(clmm_data)) == clmm_data
