"""Tests for device variant resolution."""
import pytest

from acaiaproto import (
    AcaiaConfigError,
    AcaiaUnsupportedModel,
    SelectionStrategy,
    is_acaia_name,
    resolve_variant,
)
from acaiaproto.const import (
    CLASSIC_CHAR_UUID,
    CLASSIC_SERVICE_UUID,
    VENDOR_COMMAND_UUID,
    VENDOR_SERVICE_UUID,
    VENDOR_WEIGHT_UUID,
)
from acaiaproto.frames import CONFIG_FRAME
from acaiaproto.variants import CLASSIC_LAYOUT, VENDOR_LAYOUT, detect_layout


@pytest.mark.parametrize(
    "kwargs",
    [{}, {"name": ""}, {"address": "   "}, {"name": None, "address": None, "model": ""}],
)
def test_empty_selection_fails(kwargs):
    with pytest.raises(AcaiaConfigError, match="must be set"):
        resolve_variant(**kwargs)


def test_selection_is_exclusive():
    with pytest.raises(AcaiaConfigError, match="only one"):
        resolve_variant(name="ACAIA", address="AA:BB:CC:DD:EE:FF")


def test_unsupported_model():
    with pytest.raises(AcaiaUnsupportedModel, match="unsupported model: brewista"):
        resolve_variant(model="brewista")


def test_name_prefix():
    variant = resolve_variant(name="acaia")

    assert variant.strategy is SelectionStrategy.NAME_PREFIX
    assert variant.layout == CLASSIC_LAYOUT
    assert variant.detects_layout
    assert variant.matches("ACAIA1234", None)
    assert variant.matches("acaia", None)
    assert not variant.matches("PYXIS", None)
    assert not variant.matches(None, "AA:BB:CC:DD:EE:FF")


def test_address():
    variant = resolve_variant(address="aa:bb:cc:dd:ee:ff")

    assert variant.strategy is SelectionStrategy.ADDRESS
    assert variant.identifier == "AA:BB:CC:DD:EE:FF"
    assert variant.matches(None, "AA:BB:CC:DD:EE:FF")
    assert variant.matches("whatever", "aa:bb:cc:dd:ee:ff")
    assert not variant.matches("ACAIA", "AA:BB:CC:DD:EE:00")


def test_classic_model():
    variant = resolve_variant(model="lunar")

    assert variant.strategy is SelectionStrategy.MODEL
    assert not variant.detects_layout
    assert variant.service_uuid == CLASSIC_SERVICE_UUID
    assert variant.read_uuid == variant.write_uuid == CLASSIC_CHAR_UUID
    assert variant.auth_frame == bytes.fromhex("efdd0b") + b"\x2d" * 15 + bytes.fromhex("683b")
    assert variant.config_frame == CONFIG_FRAME
    assert variant.matches("LUNAR-123", None)


def test_vendor_model():
    variant = resolve_variant(model="Pyxis")

    assert variant.identifier == "pyxis"
    assert variant.service_uuid == VENDOR_SERVICE_UUID
    assert variant.read_uuid == VENDOR_WEIGHT_UUID
    assert variant.write_uuid == VENDOR_COMMAND_UUID
    assert variant.auth_frame[3:18] == b"012345678901234"


def test_with_layout_returns_copy():
    variant = resolve_variant(address="AA:BB:CC:DD:EE:FF")
    vendor = variant.with_layout(VENDOR_LAYOUT)

    assert vendor.layout == VENDOR_LAYOUT
    assert vendor.identifier == variant.identifier
    assert variant.layout == CLASSIC_LAYOUT


def test_detect_layout():
    assert detect_layout([VENDOR_SERVICE_UUID.upper()]) == VENDOR_LAYOUT
    assert detect_layout([CLASSIC_SERVICE_UUID, VENDOR_SERVICE_UUID]) == CLASSIC_LAYOUT
    assert detect_layout(["0000180a-0000-1000-8000-00805f9b34fb"]) is None


def test_is_acaia_name():
    assert is_acaia_name("PROCHBT001")
    assert is_acaia_name("pyxis-1234")
    assert not is_acaia_name("FELICITA")
    assert not is_acaia_name(None)
