"""Tests for weight payload decoding."""
import pytest

from acaiaproto import AcaiaDecodeError, decode_weight


def test_hundredths():
    measurement = decode_weight(bytes.fromhex("0001100000000200"))
    assert measurement.magnitude == 16
    assert measurement.divisor == 100
    assert not measurement.negative
    assert measurement.value == pytest.approx(0.16)


def test_sign_bit():
    measurement = decode_weight(bytes.fromhex("0001100000000202"))
    assert measurement.negative
    assert measurement.value == pytest.approx(-0.16)


def test_tenths():
    measurement = decode_weight(bytes.fromhex("0001640000000100"))
    assert measurement.divisor == 10
    assert measurement.value == pytest.approx(10.0)


def test_magnitude_is_little_endian():
    assert decode_weight(bytes.fromhex("0000341200000100")).value == pytest.approx(466.0)


def test_other_sign_bits_are_ignored():
    assert decode_weight(bytes.fromhex("00011000000002fd")).value == pytest.approx(0.16)


@pytest.mark.parametrize("selector", [0x00, 0x03, 0xFF])
def test_unknown_precision_is_rejected(selector):
    payload = bytes.fromhex("000110000000") + bytes((selector, 0x00))
    with pytest.raises(AcaiaDecodeError, match="precision"):
        decode_weight(payload)


@pytest.mark.parametrize("payload", [b"", bytes(7), bytes(9)])
def test_wrong_length_is_rejected(payload):
    with pytest.raises(AcaiaDecodeError):
        decode_weight(payload)
