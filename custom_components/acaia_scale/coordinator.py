"""DataUpdateCoordinator for Acaia Scale."""
from __future__ import annotations

from datetime import datetime
import logging
from typing import Any

from bleak.backends.device import BLEDevice

from acaiaproto import AcaiaDeviceNotFound, AcaiaSession, DeviceVariant, SelectionStrategy
from acaiaproto.pipeline import MEASUREMENT_WEIGHT

from homeassistant.components import bluetooth
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .const import CONF_VALIDATE_CHECKSUM, DEFAULT_VALIDATE_CHECKSUM, DOMAIN
from .models import AcaiaScaleData

_LOGGER = logging.getLogger(__name__)


class AcaiaScaleDataUpdateCoordinator(DataUpdateCoordinator[AcaiaScaleData]):
    """Push-based coordinator fed by the scale's weight notifications."""

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        variant: DeviceVariant,
    ) -> None:
        """Initialize."""
        self._config_entry = config_entry
        self._session = AcaiaSession(
            variant,
            self,
            validate_checksum=config_entry.data.get(
                CONF_VALIDATE_CHECKSUM, DEFAULT_VALIDATE_CHECKSUM
            ),
            disconnected_callback=self._on_disconnect,
        )
        self._address: str | None = None
        self._connection_attempts = 0
        self._last_successful_connection: datetime | None = None
        self._total_disconnections = 0

        super().__init__(
            hass,
            _LOGGER,
            name=DOMAIN,
            update_interval=None,
            config_entry=config_entry,
        )

    @property
    def variant(self) -> DeviceVariant:
        """Return the device variant of the session."""
        return self._session.variant

    @property
    def is_connected(self) -> bool:
        """Return True if connected to the scale."""
        return self._session.is_connected

    @property
    def device_info(self) -> dict[str, Any]:
        """Return device information for all entities."""
        info: dict[str, Any] = {
            "identifiers": {(DOMAIN, self.variant.identifier)},
            "name": self._config_entry.title or "Acaia Scale",
            "manufacturer": "Acaia",
            "model": self.variant.identifier
            if self.variant.strategy is SelectionStrategy.MODEL
            else "Scale",
        }
        if self._address:
            info["connections"] = {("bluetooth", self._address.lower())}
        return info

    @property
    def connection_stats(self) -> dict[str, Any]:
        """Return connection statistics for diagnostics."""
        return {
            "connection_attempts": self._connection_attempts,
            "total_disconnections": self._total_disconnections,
            "last_successful_connection": (
                self._last_successful_connection.isoformat()
                if self._last_successful_connection
                else None
            ),
        }

    @property
    def pipeline_stats(self) -> dict[str, Any]:
        """Return protocol counters for diagnostics."""
        return self._session.stats

    async def _async_update_data(self) -> AcaiaScaleData:
        """Return current data - all updates are pushed by notifications."""
        return self.data or AcaiaScaleData()

    @callback
    def _async_find_device(self) -> BLEDevice:
        """Find the advertising scale matching the variant."""
        variant = self.variant
        if variant.strategy is SelectionStrategy.ADDRESS:
            ble_device = bluetooth.async_ble_device_from_address(
                self.hass, variant.identifier, connectable=True
            )
            if ble_device:
                return ble_device
        else:
            for service_info in bluetooth.async_discovered_service_info(
                self.hass, connectable=True
            ):
                if variant.matches(service_info.name, service_info.address):
                    return service_info.device

        raise AcaiaDeviceNotFound(f"Could not find scale matching {variant.identifier}")

    async def async_connect(self) -> None:
        """Look up the scale and start the session."""
        ble_device = self._async_find_device()
        self._address = ble_device.address

        self._connection_attempts += 1
        await self._session.async_start(ble_device)
        self._last_successful_connection = datetime.now()
        _LOGGER.info(
            "Successfully connected to Acaia Scale (attempt %d)",
            self._connection_attempts,
        )

    @callback
    def emit(self, measurement_name: str, fields: dict[str, Any]) -> None:
        """Accept a measurement from the session."""
        if measurement_name != MEASUREMENT_WEIGHT:
            return

        data = self.data or AcaiaScaleData()
        data.update_weight(fields["value"])
        self.async_set_updated_data(data)

    @callback
    def _on_disconnect(self) -> None:
        """Handle an unexpected disconnection."""
        self._total_disconnections += 1
        _LOGGER.info(
            "Acaia Scale disconnected (total: %d), reloading entry",
            self._total_disconnections,
        )
        self.async_update_listeners()
        self.hass.config_entries.async_schedule_reload(self._config_entry.entry_id)

    async def async_shutdown(self) -> None:
        """Disconnect from the scale."""
        await self._session.async_stop()
        await super().async_shutdown()
