from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import controller as registry  # noqa: E402
from controller import SmartHomeController  # noqa: E402
from models import AutomaticDoor, Fan, Heater, Light  # noqa: E402


@pytest.fixture()
def home() -> SmartHomeController:
    return SmartHomeController()


@pytest.fixture()
def shared_controller(monkeypatch) -> SmartHomeController:
    """Sustituye la instancia global que usan la API y el servidor MCP."""
    fresh = SmartHomeController()
    monkeypatch.setattr(registry, "controller", fresh)
    return fresh


@pytest.fixture()
def sample_devices() -> list:
    return [
        Light(1, "Salon"),
        Fan(2, "Dormitorio", speed=1),
        Heater(3, "Bano", temperature=22),
        AutomaticDoor(4, "Entrada"),
    ]
