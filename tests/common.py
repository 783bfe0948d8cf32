"""Helpers for building protocol byte streams in tests."""
from __future__ import annotations

from types import SimpleNamespace

from acaiaproto.const import MSG_TYPE_EVENT
from acaiaproto.frames import encode


def event_frame(payload: bytes) -> bytes:
    """Return an event frame carrying the given payload."""
    return encode(MSG_TYPE_EVENT, bytes((len(payload),)) + payload)


def weight_payload(magnitude: int, precision: int = 0x02, negative: bool = False) -> bytes:
    """Return an 8 byte weight payload."""
    return (
        b"\x00\x01"
        + magnitude.to_bytes(2, "little")
        + b"\x00\x00"
        + bytes((precision, 0x02 if negative else 0x00))
    )


def weight_frame(magnitude: int, precision: int = 0x02, negative: bool = False) -> bytes:
    """Return a complete weight frame."""
    return event_frame(weight_payload(magnitude, precision, negative))


class FakeAccumulator:
    """Collects emitted measurements."""

    def __init__(self) -> None:
        self.measurements: list[tuple[str, dict]] = []

    def emit(self, measurement_name: str, fields: dict) -> None:
        self.measurements.append((measurement_name, fields))

    @property
    def values(self) -> list[float]:
        return [fields["value"] for _, fields in self.measurements]


class FakeService:
    """Minimal stand-in for a bleak GATT service."""

    def __init__(self, uuid: str, *char_uuids: str) -> None:
        self.uuid = uuid
        self.characteristics = [SimpleNamespace(uuid=char_uuid) for char_uuid in char_uuids]

    def get_characteristic(self, uuid: str):
        return next((char for char in self.characteristics if char.uuid == uuid), None)


class FakeServices:
    """Minimal stand-in for a bleak GATT service collection."""

    def __init__(self, *services: FakeService) -> None:
        self._services = services

    def __iter__(self):
        return iter(self._services)

    def get_service(self, uuid: str):
        return next((service for service in self._services if service.uuid == uuid), None)
