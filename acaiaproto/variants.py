"""Device variants: which peripheral to look for and how to talk to it."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
import enum
import logging

from .const import (
    CLASSIC_AUTH_PAYLOAD,
    CLASSIC_CHAR_UUID,
    CLASSIC_SERVICE_UUID,
    SCALE_START_NAMES,
    VENDOR_AUTH_PAYLOAD,
    VENDOR_COMMAND_UUID,
    VENDOR_SERVICE_UUID,
    VENDOR_WEIGHT_UUID,
)
from .exceptions import AcaiaConfigError, AcaiaUnsupportedModel
from .frames import CONFIG_FRAME, encode_auth

_LOGGER = logging.getLogger(__name__)


class SelectionStrategy(enum.Enum):
    """How the peripheral is picked out of the advertisements."""

    NAME_PREFIX = "name"
    ADDRESS = "address"
    MODEL = "model"


@dataclass(frozen=True)
class ChannelLayout:
    """Service and characteristics carrying the protocol."""

    service_uuid: str
    read_uuid: str
    write_uuid: str
    auth_payload: bytes


CLASSIC_LAYOUT = ChannelLayout(
    service_uuid=CLASSIC_SERVICE_UUID,
    read_uuid=CLASSIC_CHAR_UUID,
    write_uuid=CLASSIC_CHAR_UUID,
    auth_payload=CLASSIC_AUTH_PAYLOAD,
)

VENDOR_LAYOUT = ChannelLayout(
    service_uuid=VENDOR_SERVICE_UUID,
    read_uuid=VENDOR_WEIGHT_UUID,
    write_uuid=VENDOR_COMMAND_UUID,
    auth_payload=VENDOR_AUTH_PAYLOAD,
)


@dataclass(frozen=True)
class ModelSpec:
    """Static description of a known scale model."""

    layout: ChannelLayout
    name_prefixes: tuple[str, ...]


MODELS: dict[str, ModelSpec] = {
    "acaia": ModelSpec(CLASSIC_LAYOUT, ("ACAIA",)),
    "lunar": ModelSpec(CLASSIC_LAYOUT, ("LUNAR",)),
    "pearl": ModelSpec(CLASSIC_LAYOUT, ("PEARL",)),
    "proch": ModelSpec(CLASSIC_LAYOUT, ("PROCH",)),
    "lunar_2021": ModelSpec(VENDOR_LAYOUT, ("LUNAR",)),
    "pearl_s": ModelSpec(VENDOR_LAYOUT, ("PEARLS",)),
    "pyxis": ModelSpec(VENDOR_LAYOUT, ("PYXIS",)),
    "umbra": ModelSpec(VENDOR_LAYOUT, ("UMBRA",)),
}


@dataclass(frozen=True)
class DeviceVariant:
    """A resolved device selection. Never mutated once created."""

    identifier: str
    strategy: SelectionStrategy
    layout: ChannelLayout
    name_prefixes: tuple[str, ...] = ()

    @property
    def service_uuid(self) -> str:
        return self.layout.service_uuid

    @property
    def read_uuid(self) -> str:
        return self.layout.read_uuid

    @property
    def write_uuid(self) -> str:
        return self.layout.write_uuid

    @property
    def auth_frame(self) -> bytes:
        """Return the identify frame for this variant."""
        return encode_auth(self.layout.auth_payload)

    @property
    def config_frame(self) -> bytes:
        """Return the frame enabling weight, battery and timer reports."""
        return CONFIG_FRAME

    @property
    def detects_layout(self) -> bool:
        """Return True if the layout should be probed after connecting."""
        return self.strategy is not SelectionStrategy.MODEL

    def matches(self, name: str | None, address: str | None) -> bool:
        """Return True if an advertising peripheral is this device."""
        if self.strategy is SelectionStrategy.ADDRESS:
            return address is not None and address.upper() == self.identifier
        if not name:
            return False
        name = name.upper()
        return any(name.startswith(prefix) for prefix in self.name_prefixes)

    def with_layout(self, layout: ChannelLayout) -> DeviceVariant:
        """Return a copy of this variant using another layout."""
        return replace(self, layout=layout)


def is_acaia_name(name: str | None) -> bool:
    """Check if an advertised name belongs to an Acaia scale."""
    if not name:
        return False
    return name.upper().startswith(SCALE_START_NAMES)


def detect_layout(service_uuids: Iterable[str]) -> ChannelLayout | None:
    """Pick the layout matching the services a connected scale exposes."""
    uuids = {uuid.lower() for uuid in service_uuids}
    if CLASSIC_SERVICE_UUID in uuids:
        return CLASSIC_LAYOUT
    if VENDOR_SERVICE_UUID in uuids:
        return VENDOR_LAYOUT
    return None


def resolve_variant(
    *,
    name: str | None = None,
    address: str | None = None,
    model: str | None = None,
) -> DeviceVariant:
    """Resolve configuration values into a device variant.

    Exactly one of ``name`` (advertised name prefix), ``address`` or ``model``
    must be set. Errors are raised before any Bluetooth I/O happens.
    """
    name = (name or "").strip()
    address = (address or "").strip()
    model = (model or "").strip()

    populated = [value for value in (name, address, model) if value]
    if not populated:
        raise AcaiaConfigError("name, address or model must be set")
    if len(populated) > 1:
        raise AcaiaConfigError("only one of name, address or model may be set")

    if name:
        variant = DeviceVariant(
            identifier=name,
            strategy=SelectionStrategy.NAME_PREFIX,
            layout=CLASSIC_LAYOUT,
            name_prefixes=(name.upper(),),
        )
    elif address:
        variant = DeviceVariant(
            identifier=address.upper(),
            strategy=SelectionStrategy.ADDRESS,
            layout=CLASSIC_LAYOUT,
        )
    else:
        model_spec = MODELS.get(model.lower())
        if model_spec is None:
            raise AcaiaUnsupportedModel(model)
        variant = DeviceVariant(
            identifier=model.lower(),
            strategy=SelectionStrategy.MODEL,
            layout=model_spec.layout,
            name_prefixes=model_spec.name_prefixes,
        )

    _LOGGER.debug("Resolved %s variant %s", variant.strategy.value, variant.identifier)
    return variant
