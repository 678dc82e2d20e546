from __future__ import annotations

import pytest

from models import AutomaticDoor, Fan, Light
from servers import mcp_devices


def test_agregar_dispositivo_with_initial_value(shared_controller) -> None:
    result = mcp_devices.agregar_dispositivo("fan", 2, "Techo", initial_value="2")
    assert result["status"] == "ok"
    assert result["details"]["speed_name"] == "MEDIUM"
    assert len(shared_controller) == 1


def test_agregar_door_unlocked(shared_controller) -> None:
    result = mcp_devices.agregar_dispositivo("door", 4, "Entrada", initial_value="unlocked")
    assert result["details"]["locked"] is False


def test_agregar_dispositivo_unknown_type(shared_controller) -> None:
    with pytest.raises(ValueError):
        mcp_devices.agregar_dispositivo("oven", 1, "Horno")
    assert len(shared_controller) == 0


def test_control_tools_report_not_found(shared_controller) -> None:
    assert mcp_devices.encender_dispositivo(99)["status"] == "not_found"
    assert mcp_devices.apagar_dispositivo(99)["status"] == "not_found"
    assert mcp_devices.eliminar_dispositivo(99)["status"] == "not_found"
    assert mcp_devices.ajustar_dispositivo(99, "1")["status"] == "not_found"


def test_ajustar_dispositivo_parses_text(shared_controller) -> None:
    shared_controller.add_device(Light(1, "Salon"))
    shared_controller.add_device(AutomaticDoor(4, "Entrada"))

    assert mcp_devices.ajustar_dispositivo(1, "-5")["details"]["brightness"] == 0
    assert mcp_devices.ajustar_dispositivo(4, "2")["details"]["locked"] is False
    assert mcp_devices.ajustar_dispositivo(4, "abrir")["status"] == "invalid_option"


def test_consultar_dispositivo(shared_controller) -> None:
    shared_controller.add_device(Fan(2, "Techo"))
    assert mcp_devices.consultar_dispositivo(2)["type"] == "fan"
    assert mcp_devices.consultar_dispositivos() == shared_controller.list_devices()
    with pytest.raises(ValueError):
        mcp_devices.consultar_dispositivo(3)


def test_format_device_report_field_order() -> None:
    door = AutomaticDoor(4, "Entrada")
    door.turn_on()
    report = mcp_devices.format_device_report(door.show_details())
    assert report.splitlines() == [
        "ID de dispositivo: 4, Nombre: Entrada, Estado: ON",
        "Puerta: Bloqueada",
        "CCTV: OFF",
    ]


def test_devices_state_resource(shared_controller) -> None:
    assert "No hay dispositivos" in mcp_devices.get_devices_state()

    shared_controller.add_device(Light(1, "Salon"))
    shared_controller.add_device(Fan(2, "Techo", speed=3))
    state = mcp_devices.get_devices_state()
    assert "Brillo: 50%" in state
    assert "Velocidad: 3 (HIGH)" in state
    assert "Total: 2 dispositivos" in state


def test_device_detail_resource(shared_controller) -> None:
    shared_controller.add_device(Light(1, "Salon"))
    assert "Brillo: 50%" in mcp_devices.get_device_detail("1")
    assert "no encontrado" in mcp_devices.get_device_detail("2")
    assert "no es un número" in mcp_devices.get_device_detail("uno")


def test_role_prompt_mentions_ranges() -> None:
    prompt = mcp_devices.device_controller_role()
    assert "0 y 100" in prompt
    assert "camera-on" in prompt


@pytest.mark.parametrize("initial_value", ["1", "yes", "lockd"])
def test_agregar_door_with_unrecognized_value_is_rejected(shared_controller, initial_value) -> None:
    with pytest.raises(ValueError):
        mcp_devices.agregar_dispositivo("door", 5, "Garaje", initial_value=initial_value)
    assert len(shared_controller) == 0


def test_agregar_door_locked_token(shared_controller) -> None:
    result = mcp_devices.agregar_dispositivo("door", 5, "Garaje", initial_value=" Locked ")
    assert result["details"]["locked"] is True


def test_agregar_unknown_type_uses_factory_message(shared_controller) -> None:
    with pytest.raises(ValueError, match="'oven' inválido"):
        mcp_devices.agregar_dispositivo("oven", 1, "Horno", initial_value="180")


def test_devices_state_lists_in_insertion_order(shared_controller) -> None:
    shared_controller.add_device(Fan(2, "Techo"))
    shared_controller.add_device(Light(1, "Salon"))
    shared_controller.add_device(AutomaticDoor(4, "Entrada"))

    state = mcp_devices.get_devices_state()

    positions = [state.index(f"Nombre: {name}") for name in ("Techo", "Salon", "Entrada")]
    assert positions == sorted(positions)
