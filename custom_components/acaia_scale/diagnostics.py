"""Diagnostics support for Acaia Scale."""
from __future__ import annotations

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.device_registry import DeviceEntry

from .models import AcaiaScaleConfigEntry

TO_REDACTED = {"address"}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: AcaiaScaleConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator = entry.runtime_data
    variant = coordinator.variant

    return {
        "entry": {
            "title": entry.title,
            "data": {
                key: ("**REDACTED**" if key in TO_REDACTED else value)
                for key, value in entry.data.items()
            },
            "options": dict(entry.options),
        },
        "variant": {
            "strategy": variant.strategy.value,
            "service_uuid": variant.service_uuid,
            "read_uuid": variant.read_uuid,
            "write_uuid": variant.write_uuid,
        },
        "coordinator": {
            "last_update_success": coordinator.last_update_success,
            "connected": coordinator.is_connected,
            "connection_stats": coordinator.connection_stats,
            "pipeline_stats": coordinator.pipeline_stats,
        },
        "data": {
            "weight": coordinator.data.weight if coordinator.data else None,
            "last_measurement": (
                coordinator.data.last_measurement.isoformat()
                if coordinator.data and coordinator.data.last_measurement
                else None
            ),
        },
    }


async def async_get_device_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry, device: DeviceEntry
) -> dict[str, Any]:
    """Return diagnostics for a device."""
    return await async_get_config_entry_diagnostics(hass, entry)
