from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional


# ========== RESULTADOS ==========

class OutcomeStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    INVALID_OPTION = "invalid_option"
    DUPLICATE_ID = "duplicate_id"


@dataclass
class Outcome:
    """Resultado de una operación sobre el registro de dispositivos."""
    status: OutcomeStatus
    message: str
    device_id: Optional[int] = None
    details: Optional[dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK

    def to_dict(self) -> dict:
        """Convierte a diccionario para serialización."""
        return {
            "status": self.status.value,
            "message": self.message,
            "device_id": self.device_id,
            "details": self.details,
        }


# ========== ESTADO COMÚN ==========

@dataclass
class DeviceInfo:
    """Estado compartido por todos los dispositivos."""
    id: int
    name: str
    power: bool = False


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _power_label(power: bool) -> str:
    return "ON" if power else "OFF"


class Device(ABC):
    """
    Contrato común de un dispositivo domótico.

    Cada variante guarda su estado base en `info` y define su propio ajuste.
    Ninguna operación escribe en consola: todas devuelven un `Outcome`.
    """

    device_type: str = ""

    def __init__(self, device_id: int, name: str):
        self.info = DeviceInfo(id=device_id, name=name)

    @property
    def id(self) -> int:
        return self.info.id

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def power(self) -> bool:
        return self.info.power

    def turn_on(self) -> Outcome:
        self.info.power = True
        return self._result(f"{self.name} ahora está ON.")

    def turn_off(self) -> Outcome:
        self.info.power = False
        return self._result(f"{self.name} ahora está OFF.")

    def show_details(self) -> dict:
        """Informe de solo lectura: campos base primero, luego los de la variante."""
        details = {
            "id": self.info.id,
            "name": self.info.name,
            "type": self.device_type,
            "power": _power_label(self.info.power),
        }
        details.update(self._variant_details())
        return details

    @abstractmethod
    def adjust_settings(self, value: Any) -> Outcome:
        """Aplica un ajuste específico de la variante sobre una entrada ya interpretada."""

    @abstractmethod
    def _variant_details(self) -> dict:
        ...

    def _result(self, message: str) -> Outcome:
        return Outcome(OutcomeStatus.OK, message, self.id, self.show_details())

    def _invalid(self, value: Any) -> Outcome:
        return Outcome(
            OutcomeStatus.INVALID_OPTION,
            f"Opción inválida para {self.name}: {value!r}",
            self.id,
            self.show_details(),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, name={self.name!r})"


def _as_int(value: Any) -> Optional[int]:
    """Convierte la entrada a entero; None si no es un número entero."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _require_int(value: Any, field: str) -> int:
    number = _as_int(value)
    if number is None:
        raise ValueError(f"{field} debe ser un número entero, no {value!r}")
    return number


def _require_bool(value: Any, field: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{field} debe ser booleano, no {value!r}")
    return value


# ========== VARIANTES ==========

class Light(Device):
    device_type = "light"

    MIN_BRIGHTNESS = 0
    MAX_BRIGHTNESS = 100
    DEFAULT_BRIGHTNESS = 50

    def __init__(self, device_id: int, name: str, brightness: int = DEFAULT_BRIGHTNESS):
        super().__init__(device_id, name)
        level = _require_int(brightness, "brightness")
        self.brightness = clamp(level, self.MIN_BRIGHTNESS, self.MAX_BRIGHTNESS)

    def adjust_settings(self, value: Any) -> Outcome:
        level = _as_int(value)
        if level is None:
            return self._invalid(value)
        # Fuera de rango se ajusta al límite, nunca se rechaza
        self.brightness = clamp(level, self.MIN_BRIGHTNESS, self.MAX_BRIGHTNESS)
        return self._result(f"Brillo ajustado a {self.brightness}%.")

    def _variant_details(self) -> dict:
        return {"brightness": self.brightness}


class FanSpeed(IntEnum):
    OFF = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class Fan(Device):
    device_type = "fan"

    MIN_SPEED = FanSpeed.OFF
    MAX_SPEED = FanSpeed.HIGH
    DEFAULT_SPEED = FanSpeed.OFF

    def __init__(self, device_id: int, name: str, speed: int = DEFAULT_SPEED):
        super().__init__(device_id, name)
        level = _require_int(speed, "speed")
        self.speed = FanSpeed(clamp(level, self.MIN_SPEED, self.MAX_SPEED))

    def adjust_settings(self, value: Any) -> Outcome:
        level = _as_int(value)
        if level is None:
            return self._invalid(value)
        self.speed = FanSpeed(clamp(level, self.MIN_SPEED, self.MAX_SPEED))
        return self._result(f"Velocidad ajustada a {int(self.speed)} ({self.speed.name}).")

    def _variant_details(self) -> dict:
        return {"speed": int(self.speed), "speed_name": self.speed.name}


class Heater(Device):
    device_type = "heater"

    DEFAULT_TEMPERATURE = 20

    def __init__(self, device_id: int, name: str, temperature: int = DEFAULT_TEMPERATURE):
        super().__init__(device_id, name)
        self.temperature = _require_int(temperature, "temperature")

    def adjust_settings(self, value: Any) -> Outcome:
        temperature = _as_int(value)
        if temperature is None:
            return self._invalid(value)
        self.temperature = temperature
        return self._result(f"Temperatura ajustada a {self.temperature}°C.")

    def _variant_details(self) -> dict:
        return {"temperature": self.temperature}


class DoorOption(IntEnum):
    LOCK = 1
    UNLOCK = 2
    CAMERA_ON = 3
    CAMERA_OFF = 4

    @classmethod
    def parse(cls, value: Any) -> Optional["DoorOption"]:
        """Acepta el miembro, su número (1-4) o su nombre ('lock', 'camera-on'...)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_").replace(" ", "_")
            if key in cls.__members__:
                return cls[key]
        try:
            return cls(_as_int(value))
        except ValueError:
            return None


class AutomaticDoor(Device):
    """Puerta automática con cámara CCTV."""

    device_type = "door"

    def __init__(self, device_id: int, name: str, locked: bool = True, camera_on: bool = False):
        super().__init__(device_id, name)
        self.locked = _require_bool(locked, "locked")
        self.camera_on = _require_bool(camera_on, "camera_on")

    def adjust_settings(self, value: Any) -> Outcome:
        option = DoorOption.parse(value)
        if option is None:
            return self._invalid(value)

        if option is DoorOption.LOCK:
            self.locked = True
            message = f"{self.name} está bloqueada."
        elif option is DoorOption.UNLOCK:
            self.locked = False
            message = f"{self.name} está desbloqueada."
        elif option is DoorOption.CAMERA_ON:
            self.camera_on = True
            message = "La cámara CCTV ahora está ON."
        else:
            self.camera_on = False
            message = "La cámara CCTV ahora está OFF."
        return self._result(message)

    def _variant_details(self) -> dict:
        return {
            "locked": self.locked,
            "camera_on": self.camera_on,
        }


# ========== FÁBRICA ==========

DEVICE_TYPES: dict[str, type[Device]] = {
    "light": Light,
    "fan": Fan,
    "heater": Heater,
    "door": AutomaticDoor,
}


def create_device(device_type: str, device_id: int, name: str, **settings) -> Device:
    """Construye un dispositivo de la variante indicada."""
    try:
        cls = DEVICE_TYPES[device_type]
    except KeyError:
        raise ValueError(
            f"Tipo '{device_type}' inválido. Usar {', '.join(repr(t) for t in DEVICE_TYPES)}"
        ) from None
    return cls(device_id, name, **settings)
