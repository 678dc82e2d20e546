import logging
from typing import Any, Iterator, Optional

from models import Device, Outcome, OutcomeStatus

logger = logging.getLogger(__name__)


class SmartHomeController:
    """Registro central de dispositivos: único dueño y enrutador por ID."""

    # Los IDs duplicados se admiten; las búsquedas devuelven la primera coincidencia
    REJECT_DUPLICATE_IDS = False

    def __init__(self, reject_duplicates: Optional[bool] = None):
        self._devices: list[Device] = []
        self.reject_duplicates = (
            self.REJECT_DUPLICATE_IDS if reject_duplicates is None else reject_duplicates
        )

    # ========== BÚSQUEDA ==========

    def _find_index(self, device_id: int) -> Optional[int]:
        """Recorrido lineal; gana la primera coincidencia."""
        for index, device in enumerate(self._devices):
            if device.id == device_id:
                return index
        return None

    def _not_found(self, device_id: int) -> Outcome:
        logger.warning("Dispositivo %s no encontrado", device_id)
        return Outcome(
            OutcomeStatus.NOT_FOUND,
            f"Dispositivo '{device_id}' no encontrado",
            device_id,
        )

    def __len__(self) -> int:
        return len(self._devices)

    def __contains__(self, device_id: object) -> bool:
        return any(device.id == device_id for device in self._devices)

    # ========== GESTIÓN DE DISPOSITIVOS ==========

    def add_device(self, device: Device) -> Outcome:
        """Añade un dispositivo al final del registro."""
        if self.reject_duplicates and device.id in self:
            logger.warning("ID duplicado %s rechazado", device.id)
            return Outcome(
                OutcomeStatus.DUPLICATE_ID,
                f"Ya existe un dispositivo con ID '{device.id}'",
                device.id,
            )

        self._devices.append(device)
        logger.info("Dispositivo añadido: %r", device)
        return Outcome(
            OutcomeStatus.OK,
            "Dispositivo añadido correctamente.",
            device.id,
            device.show_details(),
        )

    def remove_device(self, device_id: int) -> Outcome:
        """Elimina solo la primera coincidencia; el registro suelta su referencia."""
        index = self._find_index(device_id)
        if index is None:
            return self._not_found(device_id)

        device = self._devices.pop(index)
        details = device.show_details()
        logger.info("Dispositivo eliminado: %r", device)
        return Outcome(
            OutcomeStatus.OK,
            "Dispositivo eliminado correctamente.",
            device_id,
            details,
        )

    def clear(self) -> None:
        self._devices.clear()

    # ========== CONSULTAS ==========

    def iter_devices(self) -> Iterator[dict]:
        for device in self._devices:
            yield device.show_details()

    def list_devices(self) -> list[dict]:
        """Lista los informes de todos los dispositivos en orden de inserción."""
        return list(self.iter_devices())

    def get_device_details(self, device_id: int) -> Optional[dict]:
        index = self._find_index(device_id)
        if index is None:
            return None
        return self._devices[index].show_details()

    # ========== CONTROL ==========

    def control_device(self, device_id: int, turn_on: bool) -> Outcome:
        """Enciende o apaga el primer dispositivo con ese ID."""
        index = self._find_index(device_id)
        if index is None:
            return self._not_found(device_id)

        device = self._devices[index]
        return device.turn_on() if turn_on else device.turn_off()

    def adjust_device_settings(self, device_id: int, value: Any) -> Outcome:
        """Delega el ajuste en la variante del primer dispositivo con ese ID."""
        index = self._find_index(device_id)
        if index is None:
            return self._not_found(device_id)

        outcome = self._devices[index].adjust_settings(value)
        if outcome.status is OutcomeStatus.INVALID_OPTION:
            logger.warning("%s", outcome.message)
        return outcome


# Instancia global
controller = SmartHomeController()
