"""Exceptions raised by the Acaia protocol engine."""
from __future__ import annotations


class AcaiaError(Exception):
    """Base class for all Acaia errors."""


class AcaiaConfigError(AcaiaError):
    """The device selection is missing or inconsistent."""


class AcaiaUnsupportedModel(AcaiaConfigError):
    """The configured model tag is not in the model table."""

    def __init__(self, model: str) -> None:
        """Initialize."""
        super().__init__(f"unsupported model: {model}")
        self.model = model


class AcaiaDeviceNotFound(AcaiaError):
    """No advertising peripheral matched the device variant."""


class AcaiaTransportError(AcaiaError):
    """Connecting, discovering or writing to the scale failed."""


class AcaiaDecodeError(AcaiaError):
    """A frame payload could not be turned into a weight."""

    def __init__(self, payload: bytes, message: str) -> None:
        """Initialize."""
        super().__init__(f"{message}: {payload.hex()}")
        self.payload = payload
