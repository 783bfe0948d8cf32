"""Data models for Acaia Scale integration."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry

    from .coordinator import AcaiaScaleDataUpdateCoordinator


@dataclass
class AcaiaScaleData:
    """Data class for Acaia scale measurements."""

    weight: float | None = None  # Grams, as reported by the scale
    last_measurement: datetime | None = None
    measurement_count: int = 0

    def update_weight(self, weight: float) -> None:
        """Update weight measurement."""
        self.weight = weight
        self.last_measurement = datetime.now()
        self.measurement_count += 1


type AcaiaScaleConfigEntry = ConfigEntry[AcaiaScaleDataUpdateCoordinator]
