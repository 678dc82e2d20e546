import logging
from typing import Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

import controller as registry
from logging_config import setup_logging
from models import Outcome, OutcomeStatus, create_device

logger = logging.getLogger(__name__)

HOST = "0.0.0.0"
PORT = 3000

app = FastAPI(title="Smart Home API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Modelos de datos
class DeviceCreate(BaseModel):
    type: str = Field(description="'light', 'fan', 'heater' o 'door'")
    id: int
    name: str
    value: Optional[Union[int, bool]] = Field(
        default=None,
        description="Brillo, velocidad, temperatura o bloqueo inicial según el tipo",
    )

class SettingsRequest(BaseModel):
    value: Union[int, str]

INITIAL_FIELDS = {
    "light": "brightness",
    "fan": "speed",
    "heater": "temperature",
    "door": "locked",
}

STATUS_CODES = {
    OutcomeStatus.NOT_FOUND: 404,
    OutcomeStatus.INVALID_OPTION: 400,
    OutcomeStatus.DUPLICATE_ID: 409,
}

def _unwrap(outcome: Outcome) -> dict:
    """Traduce un resultado no exitoso a HTTPException."""
    if not outcome.ok:
        raise HTTPException(status_code=STATUS_CODES[outcome.status], detail=outcome.message)
    return outcome.to_dict()

# ========== ENDPOINTS DE DISPOSITIVOS ==========

@app.get("/devices")
async def get_devices():
    """Obtiene la lista de todos los dispositivos en orden de alta."""
    return {"devices": registry.controller.list_devices()}

@app.get("/devices/{device_id}")
async def get_device(device_id: int):
    """Obtiene información detallada de un dispositivo."""
    details = registry.controller.get_device_details(device_id)
    if details is None:
        raise HTTPException(status_code=404, detail=f"Dispositivo '{device_id}' no encontrado")
    return details

@app.post("/devices", status_code=201)
async def add_device(request: DeviceCreate):
    """Añade un dispositivo nuevo."""
    settings = {}
    if request.value is not None and request.type in INITIAL_FIELDS:
        settings[INITIAL_FIELDS[request.type]] = request.value
    try:
        device = create_device(request.type, request.id, request.name, **settings)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _unwrap(registry.controller.add_device(device))

@app.delete("/devices/{device_id}")
async def remove_device(device_id: int):
    """Elimina el primer dispositivo con ese ID."""
    return _unwrap(registry.controller.remove_device(device_id))

@app.post("/devices/{device_id}/on")
async def turn_on_device(device_id: int):
    return _unwrap(registry.controller.control_device(device_id, True))

@app.post("/devices/{device_id}/off")
async def turn_off_device(device_id: int):
    return _unwrap(registry.controller.control_device(device_id, False))

@app.post("/devices/{device_id}/settings")
async def adjust_device_settings(device_id: int, request: SettingsRequest):
    """Ajusta la configuración propia del dispositivo."""
    return _unwrap(registry.controller.adjust_device_settings(device_id, request.value))

# ========== ENDPOINT DE ESTADO GENERAL ==========

@app.get("/status")
async def get_status():
    """Obtiene el estado general del sistema domótico."""
    devices = registry.controller.list_devices()
    return {
        "devices": devices,
        "total_devices": len(devices),
        "powered_on": sum(1 for d in devices if d["power"] == "ON"),
    }

# ========== ENDPOINT DE SALUD ==========

@app.get("/health")
async def health():
    """Verifica que el servidor esté funcionando."""
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    setup_logging()
    logger.info("Iniciando API en %s:%s", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT)
