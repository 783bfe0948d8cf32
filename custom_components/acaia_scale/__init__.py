"""The Acaia Scale integration."""
from __future__ import annotations

import logging

from acaiaproto import (
    AcaiaConfigError,
    AcaiaDeviceNotFound,
    AcaiaTransportError,
    resolve_variant,
)

from homeassistant.const import CONF_ADDRESS, CONF_NAME, Platform
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryError, ConfigEntryNotReady

from .const import CONF_MODEL
from .coordinator import AcaiaScaleDataUpdateCoordinator
from .models import AcaiaScaleConfigEntry

PLATFORMS: list[Platform] = [Platform.SENSOR]

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, entry: AcaiaScaleConfigEntry) -> bool:
    """Set up Acaia Scale from a config entry."""
    try:
        variant = resolve_variant(
            name=entry.data.get(CONF_NAME),
            address=entry.data.get(CONF_ADDRESS),
            model=entry.data.get(CONF_MODEL),
        )
    except AcaiaConfigError as err:
        raise ConfigEntryError(str(err)) from err

    coordinator = AcaiaScaleDataUpdateCoordinator(hass, entry, variant)

    try:
        await coordinator.async_connect()
    except (AcaiaDeviceNotFound, AcaiaTransportError) as err:
        _LOGGER.debug("Could not start Acaia Scale session: %s", err)
        raise ConfigEntryNotReady(str(err)) from err

    await coordinator.async_config_entry_first_refresh()
    entry.runtime_data = coordinator

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


async def async_unload_entry(hass: HomeAssistant, entry: AcaiaScaleConfigEntry) -> bool:
    """Unload a config entry."""
    if unload_ok := await hass.config_entries.async_unload_platforms(entry, PLATFORMS):
        await entry.runtime_data.async_shutdown()
    return unload_ok
