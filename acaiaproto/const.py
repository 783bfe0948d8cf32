"""Constants for the Acaia scale protocol."""
from __future__ import annotations

from typing import Final

# Frame header
HEADER1: Final = 0xEF
HEADER2: Final = 0xDD

# Message types
MSG_TYPE_IDENTIFY: Final = 0x0B
MSG_TYPE_EVENT: Final = 0x0C

CHECKSUM_LENGTH: Final = 2
WEIGHT_PAYLOAD_LENGTH: Final = 8

# Weight payload layout
WEIGHT_MAGNITUDE_START = 2
WEIGHT_MAGNITUDE_END = 4
WEIGHT_PRECISION_INDEX = 6
WEIGHT_SIGN_INDEX = 7
WEIGHT_SIGN_MASK = 0x02

PRECISION_DIVISORS: Final = {
    0x01: 10,
    0x02: 100,
}

# Classic scales: one combined read/write characteristic
CLASSIC_SERVICE_UUID: Final = "00001820-0000-1000-8000-00805f9b34fb"
CLASSIC_CHAR_UUID: Final = "00002a80-0000-1000-8000-00805f9b34fb"

# Lunar 2021 / Pyxis style scales: vendor service, separate characteristics
VENDOR_SERVICE_UUID: Final = "49535343-fe7d-4ae5-8fa9-9fafd205e455"
VENDOR_WEIGHT_UUID: Final = "49535343-1e4d-4bd9-ba61-23c647249616"
VENDOR_COMMAND_UUID: Final = "49535343-8841-43f4-a8d4-ecbe34729bb3"

CLASSIC_AUTH_PAYLOAD: Final = b"\x2d" * 15
VENDOR_AUTH_PAYLOAD: Final = b"012345678901234"

# Advertised local name prefixes
SCALE_START_NAMES: Final = ("ACAIA", "PYXIS", "UMBRA", "LUNAR", "PROCH", "PEARL")

# Pending notification chunks held between the BLE callback and the consumer
NOTIFICATION_QUEUE_SIZE: Final = 64
