"""Protocol engine for Acaia Bluetooth scales."""

from .const import SCALE_START_NAMES
from .decode import WeightMeasurement, decode_weight
from .exceptions import (
    AcaiaConfigError,
    AcaiaDecodeError,
    AcaiaDeviceNotFound,
    AcaiaError,
    AcaiaTransportError,
    AcaiaUnsupportedModel,
)
from .frames import CONFIG_FRAME, Frame, FrameReassembler, ReassemblerState, encode
from .pipeline import Accumulator, MeasurementSink, WeightPipeline
from .session import AcaiaSession
from .variants import (
    MODELS,
    DeviceVariant,
    SelectionStrategy,
    is_acaia_name,
    resolve_variant,
)

__all__ = [
    "AcaiaConfigError",
    "AcaiaDecodeError",
    "AcaiaDeviceNotFound",
    "AcaiaError",
    "AcaiaSession",
    "AcaiaTransportError",
    "AcaiaUnsupportedModel",
    "Accumulator",
    "CONFIG_FRAME",
    "DeviceVariant",
    "Frame",
    "FrameReassembler",
    "MODELS",
    "MeasurementSink",
    "ReassemblerState",
    "SCALE_START_NAMES",
    "SelectionStrategy",
    "WeightMeasurement",
    "WeightPipeline",
    "decode_weight",
    "encode",
    "is_acaia_name",
    "resolve_variant",
]
