import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

import controller as registry
from logging_config import setup_logging
from models import Fan, Light, create_device

logger = logging.getLogger(__name__)

mcp = FastMCP("Control de Dispositivos")

TYPE_LABELS = {
    "light": "💡 Luz",
    "fan": "🌀 Ventilador",
    "heater": "🔥 Calefactor",
    "door": "🚪 Puerta automática",
}

LOCKED_TOKENS = ("true", "locked", "bloqueada")
UNLOCKED_TOKENS = ("false", "unlocked", "desbloqueada")

# ========== PRESENTACIÓN ==========

def format_device_report(details: dict) -> str:
    """Informe de texto: campos base en una línea, luego los de la variante."""
    lines = [
        f"ID de dispositivo: {details['id']}, Nombre: {details['name']}, Estado: {details['power']}"
    ]
    device_type = details.get("type")
    if device_type == "light":
        lines.append(f"Brillo: {details['brightness']}%")
    elif device_type == "fan":
        lines.append(f"Velocidad: {details['speed']} ({details['speed_name']})")
    elif device_type == "heater":
        lines.append(f"Temperatura: {details['temperature']}°C")
    elif device_type == "door":
        lines.append(f"Puerta: {'Bloqueada' if details['locked'] else 'Desbloqueada'}")
        lines.append(f"CCTV: {'ON' if details['camera_on'] else 'OFF'}")
    return "\n".join(lines)


def _initial_settings(device_type: str, initial_value: Optional[str]) -> dict:
    """Interpreta el valor inicial según el tipo de dispositivo."""
    if initial_value is None:
        return {}
    if device_type == "light":
        return {"brightness": int(initial_value)}
    if device_type == "fan":
        return {"speed": int(initial_value)}
    if device_type == "heater":
        return {"temperature": int(initial_value)}
    if device_type == "door":
        token = initial_value.strip().lower()
        if token in LOCKED_TOKENS:
            return {"locked": True}
        if token in UNLOCKED_TOKENS:
            return {"locked": False}
        raise ValueError(
            f"Valor inicial '{initial_value}' inválido para una puerta. Usar 'locked' o 'unlocked'"
        )
    return {}

# ========== PROMPT ==========

@mcp.prompt()
def device_controller_role() -> str:
    """
    Define el rol y responsabilidades del servidor de control de dispositivos.
    """
    return f"""
    Eres un asistente especializado en el CONTROL DE DISPOSITIVOS de una casa inteligente.

    TUS RESPONSABILIDADES:
    - Añadir y eliminar dispositivos por ID
    - Encender y apagar dispositivos
    - Ajustar la configuración propia de cada tipo

    TIPOS DE DISPOSITIVOS Y SUS AJUSTES:

    1. LUCES (light):
       - Brillo entre {Light.MIN_BRIGHTNESS} y {Light.MAX_BRIGHTNESS}
       - Los valores fuera de rango se ajustan al límite más cercano

    2. VENTILADORES (fan):
       - Velocidad {int(Fan.MIN_SPEED)}-{int(Fan.MAX_SPEED)} (0=OFF, 1=LOW, 2=MEDIUM, 3=HIGH)
       - Los valores fuera de rango se ajustan al límite más cercano

    3. CALEFACTORES (heater):
       - Temperatura en °C, se guarda tal cual (admite negativos)

    4. PUERTAS AUTOMÁTICAS (door):
       - Opciones: 1=lock, 2=unlock, 3=camera-on, 4=camera-off
       - Cualquier otra opción es inválida y no cambia el estado

    REGLAS IMPORTANTES:
    - Los IDs son enteros elegidos por el usuario
    - Si hay IDs repetidos, se actúa siempre sobre el primero añadido
    - Un ID inexistente se informa como "no encontrado", nunca es un fallo

    COMUNICACIÓN:
    - Confirma los cambios de estado realizados
    - Informa cuando una opción no sea válida
    """

# ========== RESOURCES ==========

@mcp.resource("smarthome://devices/state")
def get_devices_state() -> str:
    """
    Obtiene el estado actual de todos los dispositivos en orden de alta.
    """
    output = "=== ESTADO DE DISPOSITIVOS ===\n\n"

    devices = registry.controller.list_devices()

    if not devices:
        output += "No hay dispositivos en el sistema.\n"
        return output

    for dev in devices:
        label = TYPE_LABELS.get(dev["type"], dev["type"])
        report = format_device_report(dev).replace("\n", "\n   ")
        output += f"{label}\n   {report}\n\n"

    output += f"Total: {len(devices)} dispositivos en el sistema\n"

    return output

@mcp.resource("smarthome://devices/{device_id}")
def get_device_detail(device_id: str) -> str:
    """
    Obtiene información detallada de un dispositivo específico.
    """
    try:
        details = registry.controller.get_device_details(int(device_id))
    except ValueError:
        return f"Error: ID '{device_id}' no es un número entero"

    if details is None:
        return f"Error: Dispositivo '{device_id}' no encontrado"

    output = f"=== DISPOSITIVO: {device_id} ===\n\n"
    output += f"Tipo: {TYPE_LABELS.get(details['type'], details['type'])}\n"
    output += format_device_report(details) + "\n"
    return output

# ========== TOOLS - CONSULTAS ==========

@mcp.tool()
def consultar_dispositivos() -> list[dict]:
    """
    Obtiene la lista de dispositivos en orden de alta.

    Returns:
        Lista de informes de dispositivos.
    """
    return registry.controller.list_devices()

@mcp.tool()
def consultar_dispositivo(device_id: int) -> dict:
    """
    Obtiene información detallada de un dispositivo específico.

    Args:
        device_id: ID del dispositivo

    Returns:
        Informe completo del dispositivo.
    """
    details = registry.controller.get_device_details(device_id)
    if details is None:
        raise ValueError(f"Dispositivo '{device_id}' no encontrado")
    return details

# ========== TOOLS - GESTIÓN ==========

@mcp.tool()
def agregar_dispositivo(
    device_type: str,
    device_id: int,
    name: str,
    initial_value: Optional[str] = None
) -> dict:
    """
    Añade un dispositivo al sistema.

    Args:
        device_type: tipo de dispositivo: 'light', 'fan', 'heater', 'door'
        device_id: ID entero del dispositivo
        name: nombre a mostrar
        initial_value: valor inicial (opcional):
            - light: brillo 0-100 (por defecto: "50")
            - fan: velocidad 0-3 (por defecto: "0")
            - heater: temperatura en °C (por defecto: "20")
            - door: "locked" o "unlocked" (por defecto: bloqueada)

    Returns:
        Resultado de la operación con el informe del dispositivo.
    """
    device = create_device(
        device_type, device_id, name, **_initial_settings(device_type, initial_value)
    )
    return registry.controller.add_device(device).to_dict()

@mcp.tool()
def eliminar_dispositivo(device_id: int) -> dict:
    """
    Elimina un dispositivo del sistema (solo la primera coincidencia).

    Args:
        device_id: ID del dispositivo a eliminar

    Returns:
        Resultado de la eliminación.
    """
    return registry.controller.remove_device(device_id).to_dict()

# ========== TOOLS - CONTROL ==========

@mcp.tool()
def encender_dispositivo(device_id: int) -> dict:
    """
    Enciende un dispositivo.

    Args:
        device_id: ID del dispositivo

    Returns:
        Resultado con el estado actualizado.
    """
    return registry.controller.control_device(device_id, True).to_dict()

@mcp.tool()
def apagar_dispositivo(device_id: int) -> dict:
    """
    Apaga un dispositivo.

    Args:
        device_id: ID del dispositivo

    Returns:
        Resultado con el estado actualizado.
    """
    return registry.controller.control_device(device_id, False).to_dict()

@mcp.tool()
def ajustar_dispositivo(device_id: int, value: str) -> dict:
    """
    Ajusta la configuración propia del dispositivo.

    Args:
        device_id: ID del dispositivo
        value: valor según el tipo:
            - light: brillo (se ajusta a 0-100)
            - fan: velocidad (se ajusta a 0-3)
            - heater: temperatura en °C
            - door: 1/lock, 2/unlock, 3/camera-on, 4/camera-off

    Returns:
        Resultado con el estado actualizado, o 'invalid_option'.
    """
    return registry.controller.adjust_device_settings(device_id, value).to_dict()

if __name__ == "__main__":
    setup_logging()
    logger.info("Iniciando servidor MCP de dispositivos")
    mcp.run(transport="stdio")
