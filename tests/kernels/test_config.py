"""Tests for njaswap/config.py: the YAML kernel parameter file."""

from __future__ import annotations

import pytest
import yaml

from njaswap.config import KernelParams, default_params_path, kernel_params, load_params, params_from_mapping


def _doc(**overrides):
    doc = {
        "kernel": "cpmm_pool_v1",
        "version": 1,
        "arithmetic": {"amount_bits": 64, "wide_bits": 128},
        "fees": {"bps_denom": 10_000, "default_fee_rate_bps": 30},
        "liquidity": {"minimum_liquidity": 1000},
        "pool": {"pool_id_domain": "njaswap/pool", "max_authority_bump": 255},
    }
    for section, values in overrides.items():
        doc[section] = {**doc[section], **values}
    return doc


def test_packaged_params():
    p = kernel_params()
    assert p.kernel == "cpmm_pool_v1"
    assert p.bps_denom == 10_000
    assert p.default_fee_rate_bps == 30
    assert p.minimum_liquidity == 1000
    assert p.amount_max == 2**64 - 1
    assert p.wide_max == 2**128 - 1


def test_packaged_file_exists():
    assert default_params_path().is_file()


def test_load_params_from_file(tmp_path):
    path = tmp_path / "params.yaml"
    path.write_text(yaml.safe_dump(_doc(liquidity={"minimum_liquidity": 7})), encoding="utf-8")
    p = load_params(path)
    assert isinstance(p, KernelParams)
    assert p.minimum_liquidity == 7


def test_missing_section_raises_key_error():
    doc = _doc()
    del doc["fees"]
    with pytest.raises(KeyError):
        params_from_mapping(doc)


def test_non_mapping_rejected():
    with pytest.raises(TypeError):
        params_from_mapping(["not", "a", "mapping"])  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "overrides, match",
    [
        ({"arithmetic": {"wide_bits": 100}}, "wide_bits"),
        ({"fees": {"default_fee_rate_bps": 10_001}}, "default_fee_rate_bps"),
        ({"fees": {"bps_denom": 0}}, "bps_denom"),
        ({"liquidity": {"minimum_liquidity": 0}}, "minimum_liquidity"),
    ],
)
def test_invalid_values_rejected(overrides, match):
    with pytest.raises(ValueError, match=match):
        params_from_mapping(_doc(**overrides))


def test_float_values_rejected():
    with pytest.raises(TypeError, match="minimum_liquidity"):
        params_from_mapping(_doc(liquidity={"minimum_liquidity": 1000.0}))
