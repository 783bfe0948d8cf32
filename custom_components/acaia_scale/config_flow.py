"""Config flow for Acaia Scale integration."""
from __future__ import annotations

import logging
from typing import Any

from bleak import BleakScanner
import voluptuous as vol

from acaiaproto import (
    MODELS,
    AcaiaConfigError,
    AcaiaUnsupportedModel,
    is_acaia_name,
    resolve_variant,
)

from homeassistant import config_entries
from homeassistant.components import bluetooth
from homeassistant.const import CONF_ADDRESS, CONF_NAME
from homeassistant.data_entry_flow import FlowResult

from .const import CONF_MODEL, CONF_VALIDATE_CHECKSUM, DEFAULT_VALIDATE_CHECKSUM, DOMAIN

_LOGGER = logging.getLogger(__name__)


class AcaiaScaleConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Acaia Scale."""

    VERSION = 1
    MINOR_VERSION = 1

    def __init__(self) -> None:
        """Initialize the config flow."""
        self._discovered_devices: dict[str, str] = {}
        self._discovery_info: bluetooth.BluetoothServiceInfoBleak | None = None

    async def async_step_bluetooth(
        self, discovery_info: bluetooth.BluetoothServiceInfoBleak
    ) -> FlowResult:
        """Handle the bluetooth discovery step."""
        if not is_acaia_name(discovery_info.name):
            return self.async_abort(reason="not_supported")

        await self.async_set_unique_id(discovery_info.address.upper())
        self._abort_if_unique_id_configured()

        device_name = discovery_info.name or discovery_info.address
        self.context["title_placeholders"] = {"name": device_name}
        self._discovery_info = discovery_info

        return await self.async_step_bluetooth_confirm()

    async def async_step_bluetooth_confirm(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Confirm discovery."""
        assert self._discovery_info is not None

        if user_input is not None:
            return self.async_create_entry(
                title=self._discovery_info.name or self._discovery_info.address,
                data={CONF_ADDRESS: self._discovery_info.address.upper()},
            )

        self._set_confirm_only()
        return self.async_show_form(
            step_id="bluetooth_confirm",
            description_placeholders={
                "name": self._discovery_info.name or self._discovery_info.address
            },
        )

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Handle the initial step."""
        if user_input is not None:
            address = user_input[CONF_ADDRESS]

            if address == "manual":
                return await self.async_step_manual()

            address = address.upper()
            await self.async_set_unique_id(address)
            self._abort_if_unique_id_configured()

            return self.async_create_entry(
                title=self._discovered_devices.get(address, address),
                data={CONF_ADDRESS: address},
            )

        await self._async_discover_scales()

        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema({
                vol.Required(CONF_ADDRESS): vol.In(self._discovered_devices)
            }),
        )

    async def _async_discover_scales(self) -> None:
        """Discover Acaia scales."""
        self._discovered_devices = {}

        for service_info in bluetooth.async_discovered_service_info(self.hass):
            if is_acaia_name(service_info.name):
                self._discovered_devices[service_info.address.upper()] = (
                    f"{service_info.name} ({service_info.address})"
                )

        # Fall back to an active scan when Home Assistant has not seen any
        if not self._discovered_devices:
            try:
                devices = await BleakScanner.discover(timeout=10.0)
            except Exception:
                _LOGGER.exception("Error discovering scales")
                devices = []
            for device in devices:
                if is_acaia_name(device.name):
                    self._discovered_devices[device.address.upper()] = (
                        f"{device.name} ({device.address})"
                    )

        self._discovered_devices["manual"] = "Enter address, name or model manually"

    async def async_step_manual(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Handle manual selection by address, name prefix or model."""
        errors: dict[str, str] = {}

        if user_input is not None:
            selection = {
                key: user_input[key].strip()
                for key in (CONF_ADDRESS, CONF_NAME, CONF_MODEL)
                if user_input.get(key, "").strip()
            }
            try:
                variant = resolve_variant(**selection)
            except AcaiaUnsupportedModel:
                errors[CONF_MODEL] = "unsupported_model"
            except AcaiaConfigError:
                errors["base"] = "invalid_selection"
            else:
                await self.async_set_unique_id(variant.identifier)
                self._abort_if_unique_id_configured()

                return self.async_create_entry(
                    title=variant.identifier,
                    data={
                        **{key: variant.identifier for key in selection},
                        CONF_VALIDATE_CHECKSUM: user_input[CONF_VALIDATE_CHECKSUM],
                    },
                )

        return self.async_show_form(
            step_id="manual",
            data_schema=vol.Schema({
                vol.Optional(CONF_ADDRESS): str,
                vol.Optional(CONF_NAME): str,
                vol.Optional(CONF_MODEL): vol.In(sorted(MODELS)),
                vol.Optional(
                    CONF_VALIDATE_CHECKSUM, default=DEFAULT_VALIDATE_CHECKSUM
                ): bool,
            }),
            errors=errors,
        )
