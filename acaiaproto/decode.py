"""Weight payload decoding."""
from __future__ import annotations

from dataclasses import dataclass

from .const import (
    PRECISION_DIVISORS,
    WEIGHT_MAGNITUDE_END,
    WEIGHT_MAGNITUDE_START,
    WEIGHT_PAYLOAD_LENGTH,
    WEIGHT_PRECISION_INDEX,
    WEIGHT_SIGN_INDEX,
    WEIGHT_SIGN_MASK,
)
from .exceptions import AcaiaDecodeError


@dataclass(frozen=True)
class WeightMeasurement:
    """A single decoded weight reading."""

    magnitude: int
    divisor: int
    negative: bool

    @property
    def value(self) -> float:
        """Return the signed weight."""
        sign = -1 if self.negative else 1
        return sign * self.magnitude / self.divisor


def decode_weight(payload: bytes) -> WeightMeasurement:
    """Decode an 8 byte weight payload.

    Bytes 2-3 hold the little-endian magnitude, byte 6 selects tenths or
    hundredths and bit 1 of byte 7 is the sign. An unknown precision selector
    raises :class:`AcaiaDecodeError` instead of guessing a divisor.
    """
    if len(payload) != WEIGHT_PAYLOAD_LENGTH:
        raise AcaiaDecodeError(payload, "Weight payload must be 8 bytes")

    divisor = PRECISION_DIVISORS.get(payload[WEIGHT_PRECISION_INDEX])
    if divisor is None:
        raise AcaiaDecodeError(
            payload,
            f"Unknown precision selector 0x{payload[WEIGHT_PRECISION_INDEX]:02x}",
        )

    magnitude = int.from_bytes(
        payload[WEIGHT_MAGNITUDE_START:WEIGHT_MAGNITUDE_END], byteorder="little"
    )
    negative = bool(payload[WEIGHT_SIGN_INDEX] & WEIGHT_SIGN_MASK)
    return WeightMeasurement(magnitude, divisor, negative)
