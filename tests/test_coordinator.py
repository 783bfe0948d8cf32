"""Tests for the Home Assistant coordinator and manual config flow step."""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

pytest.importorskip("homeassistant.components.bluetooth")

from homeassistant.const import CONF_ADDRESS, CONF_NAME
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from acaiaproto import resolve_variant

from custom_components.acaia_scale.config_flow import AcaiaScaleConfigFlow
from custom_components.acaia_scale.const import CONF_MODEL, CONF_VALIDATE_CHECKSUM
from custom_components.acaia_scale.coordinator import AcaiaScaleDataUpdateCoordinator
from custom_components.acaia_scale.models import AcaiaScaleData


@pytest.fixture
def coordinator():
    entry = SimpleNamespace(data={}, title="Lunar", entry_id="entry")
    with patch.object(DataUpdateCoordinator, "__init__", return_value=None):
        coordinator = AcaiaScaleDataUpdateCoordinator(
            MagicMock(), entry, resolve_variant(model="lunar")
        )
    coordinator.data = None
    coordinator.async_set_updated_data = MagicMock()
    return coordinator


@pytest.fixture
def flow():
    flow = AcaiaScaleConfigFlow()
    flow.async_set_unique_id = AsyncMock()
    flow._abort_if_unique_id_configured = MagicMock()
    flow.async_show_form = MagicMock()
    flow.async_create_entry = MagicMock()
    return flow


def test_emit_updates_weight(coordinator):
    coordinator.emit("weight", {"value": 1.5})

    data = coordinator.async_set_updated_data.call_args.args[0]
    assert isinstance(data, AcaiaScaleData)
    assert data.weight == 1.5
    assert data.measurement_count == 1


def test_emit_accumulates_on_existing_data(coordinator):
    coordinator.data = AcaiaScaleData()
    coordinator.emit("weight", {"value": 1.5})
    coordinator.emit("weight", {"value": -0.25})

    assert coordinator.data.weight == -0.25
    assert coordinator.data.measurement_count == 2
    assert coordinator.async_set_updated_data.call_count == 2


def test_emit_ignores_other_measurements(coordinator):
    coordinator.emit("battery", {"value": 80})

    coordinator.async_set_updated_data.assert_not_called()
    assert coordinator.data is None


def _manual_input(**values):
    return {CONF_VALIDATE_CHECKSUM: False, **values}


async def test_manual_step_rejects_several_selections(flow):
    await flow.async_step_manual(
        _manual_input(**{CONF_ADDRESS: "AA:BB:CC:DD:EE:FF", CONF_NAME: "LUNAR"})
    )

    assert flow.async_show_form.call_args.kwargs["errors"] == {"base": "invalid_selection"}
    flow.async_create_entry.assert_not_called()


async def test_manual_step_rejects_empty_selection(flow):
    await flow.async_step_manual(_manual_input(**{CONF_NAME: "  "}))

    assert flow.async_show_form.call_args.kwargs["errors"] == {"base": "invalid_selection"}


async def test_manual_step_rejects_unknown_model(flow):
    await flow.async_step_manual(_manual_input(**{CONF_MODEL: "brewista"}))

    assert flow.async_show_form.call_args.kwargs["errors"] == {CONF_MODEL: "unsupported_model"}
    flow.async_create_entry.assert_not_called()


async def test_manual_step_creates_model_entry(flow):
    await flow.async_step_manual(
        {CONF_MODEL: "Pyxis", CONF_VALIDATE_CHECKSUM: True}
    )

    flow.async_set_unique_id.assert_awaited_once_with("pyxis")
    flow.async_create_entry.assert_called_once_with(
        title="pyxis",
        data={CONF_MODEL: "pyxis", CONF_VALIDATE_CHECKSUM: True},
    )
