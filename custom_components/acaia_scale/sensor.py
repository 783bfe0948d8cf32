"""Sensor platform for Acaia Scale integration."""
from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.const import UnitOfMass
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .coordinator import AcaiaScaleDataUpdateCoordinator
from .models import AcaiaScaleConfigEntry

PARALLEL_UPDATES = 0  # No limit since coordinator manages all updates

WEIGHT_DESCRIPTION = SensorEntityDescription(
    key="weight",
    translation_key="weight",
    device_class=SensorDeviceClass.WEIGHT,
    state_class=SensorStateClass.MEASUREMENT,
    native_unit_of_measurement=UnitOfMass.GRAMS,
    suggested_display_precision=2,
)


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: AcaiaScaleConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up Acaia Scale sensor based on a config entry."""
    coordinator = config_entry.runtime_data
    async_add_entities([AcaiaScaleWeightSensor(coordinator, config_entry)])


class AcaiaScaleWeightSensor(CoordinatorEntity[AcaiaScaleDataUpdateCoordinator], SensorEntity):
    """Weight sensor for Acaia Scale."""

    _attr_has_entity_name = True
    _attr_should_poll = False
    _unrecorded_attributes = frozenset({"last_measurement", "measurement_count"})

    def __init__(
        self,
        coordinator: AcaiaScaleDataUpdateCoordinator,
        config_entry: AcaiaScaleConfigEntry,
    ) -> None:
        """Initialize the weight sensor."""
        super().__init__(coordinator)
        self.entity_description = WEIGHT_DESCRIPTION

        self._attr_unique_id = f"{config_entry.unique_id or config_entry.entry_id}_weight"
        self._attr_name = "Weight"
        self._attr_device_info = coordinator.device_info

    @property
    def native_value(self) -> float | None:
        """Return the weight value in grams."""
        if not self.coordinator.data:
            return None
        return self.coordinator.data.weight

    @property
    def available(self) -> bool:
        """Return if entity is available."""
        return (
            super().available
            and self.coordinator.data is not None
            and self.coordinator.is_connected
        )

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        """Return the state attributes."""
        data = self.coordinator.data
        if not data or data.last_measurement is None:
            return None

        return {
            "last_measurement": data.last_measurement.isoformat(),
            "measurement_count": data.measurement_count,
        }
