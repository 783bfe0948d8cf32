"""Connection session with a single Acaia scale."""
from __future__ import annotations

from collections.abc import Callable
import contextlib
import logging
from typing import Any

from bleak import BleakError
from bleak.backends.characteristic import BleakGATTCharacteristic
from bleak.backends.device import BLEDevice
from bleak_retry_connector import BleakClientWithServiceCache, establish_connection

from .exceptions import AcaiaTransportError
from .pipeline import Accumulator, MeasurementSink, WeightPipeline
from .variants import DeviceVariant, detect_layout

_LOGGER = logging.getLogger(__name__)


class AcaiaSession:
    """Owns the link, the pipeline and the handshake for one scale.

    A session is started once. Connection and write failures are raised as
    :class:`AcaiaTransportError` and never retried here.
    """

    def __init__(
        self,
        variant: DeviceVariant,
        accumulator: Accumulator,
        *,
        validate_checksum: bool = False,
        disconnected_callback: Callable[[], None] | None = None,
    ) -> None:
        """Initialize."""
        self._variant = variant
        self._client: BleakClientWithServiceCache | None = None
        self._pipeline = WeightPipeline(
            MeasurementSink(accumulator), validate_checksum=validate_checksum
        )
        self._disconnected_callback = disconnected_callback
        self._closing = False

    @property
    def variant(self) -> DeviceVariant:
        """Return the variant in use, including a detected layout."""
        return self._variant

    @property
    def is_connected(self) -> bool:
        """Return True if connected to the scale."""
        return self._client is not None and self._client.is_connected

    @property
    def stats(self) -> dict[str, Any]:
        """Return pipeline counters for diagnostics."""
        return self._pipeline.stats

    async def async_start(self, ble_device: BLEDevice) -> None:
        """Connect, subscribe to notifications and authenticate."""
        _LOGGER.debug("Connecting to %s", ble_device.address)
        self._closing = False
        try:
            self._client = await establish_connection(
                BleakClientWithServiceCache,
                ble_device,
                ble_device.name or ble_device.address,
                disconnected_callback=self._on_disconnect,
                max_attempts=1,
            )
            read_char, write_char = self._resolve_characteristics()

            self._pipeline.start()
            await self._client.start_notify(read_char, self._pipeline.feed_notification)
            _LOGGER.debug("Notifications enabled for characteristic %s", read_char.uuid)

            await self._async_handshake(write_char)
        except AcaiaTransportError:
            await self.async_stop()
            raise
        except (BleakError, TimeoutError) as err:
            await self.async_stop()
            raise AcaiaTransportError(f"Failed to start session: {err}") from err

        _LOGGER.info("Connected to %s (%s)", ble_device.address, self._variant.identifier)

    def _resolve_characteristics(
        self,
    ) -> tuple[BleakGATTCharacteristic, BleakGATTCharacteristic]:
        """Find the read and write characteristics of the variant."""
        assert self._client is not None
        services = self._client.services

        if self._variant.detects_layout:
            layout = detect_layout(service.uuid for service in services)
            if layout is not None and layout != self._variant.layout:
                _LOGGER.info("Detected %s service layout", layout.service_uuid)
                self._variant = self._variant.with_layout(layout)

        service = services.get_service(self._variant.service_uuid)
        if service is None:
            raise AcaiaTransportError(
                f"Could not find service {self._variant.service_uuid}"
            )

        read_char = service.get_characteristic(self._variant.read_uuid)
        write_char = service.get_characteristic(self._variant.write_uuid)
        if read_char is None or write_char is None:
            raise AcaiaTransportError(
                f"Could not find characteristics on service {service.uuid}"
            )
        return read_char, write_char

    async def _async_handshake(self, write_char: BleakGATTCharacteristic) -> None:
        """Write the identify frame, then the notification config frame."""
        assert self._client is not None
        await self._client.write_gatt_char(
            write_char, self._variant.auth_frame, response=False
        )
        await self._client.write_gatt_char(
            write_char, self._variant.config_frame, response=False
        )
        _LOGGER.info("authenticated")

    def _on_disconnect(self, _: BleakClientWithServiceCache) -> None:
        """Release the consumer when the link drops."""
        self._pipeline.cancel()
        if self._closing:
            return
        _LOGGER.info("Scale %s disconnected", self._variant.identifier)
        if self._disconnected_callback is not None:
            self._disconnected_callback()

    async def async_stop(self) -> None:
        """Stop the pipeline and drop the link."""
        self._closing = True
        await self._pipeline.stop()

        client, self._client = self._client, None
        if client is not None and client.is_connected:
            with contextlib.suppress(BleakError):
                await client.disconnect()
