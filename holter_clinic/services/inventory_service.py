import logging
from typing import List, Optional, Union

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..domain.entities import Cable, Device, DeviceStatus, HolterKind
from ..domain.interfaces import (
    IAppointmentReader,
    ICableRepository,
    IDeviceRepository,
)

logger = logging.getLogger(__name__)

MISSING_SERIAL = "N/A"

_ID_PREFIXES = {HolterKind.RHYTHM: "HR-", HolterKind.PRESSURE: "HP-"}
_SERIAL_PREFIXES = {HolterKind.RHYTHM: "R-", HolterKind.PRESSURE: "P-"}


class InventoryService:
    """Registry of holters and cables.

    Resource status is never set by callers: ``mark_in_use`` and
    ``mark_available`` are only invoked by booking and release.
    """

    def __init__(
        self,
        device_repo: IDeviceRepository,
        cable_repo: ICableRepository,
        appointment_repo: IAppointmentReader,
    ):
        self.device_repo = device_repo
        self.cable_repo = cable_repo
        self.appointment_repo = appointment_repo

    def add_device(self, kind: Union[HolterKind, str]) -> Device:
        try:
            kind = HolterKind(kind)
        except ValueError as e:
            raise ValidationError(f"Unknown holter kind '{kind}'", "kind") from e
        number = self.device_repo.next_sequence(_ID_PREFIXES[kind])
        device = Device(
            id=f"{_ID_PREFIXES[kind]}{number}",
            kind=kind,
            serial_number=f"{_SERIAL_PREFIXES[kind]}{number:03d}",
            status=DeviceStatus.AVAILABLE,
        )
        self.device_repo.add(device)
        logger.info(
            "Holter added",
            extra={"context": {"device_id": device.id, "kind": kind.value}},
        )
        return device

    def add_cable(self) -> Cable:
        number = self.cable_repo.next_sequence("CBL-")
        cable = Cable(
            id=f"CBL-{number}",
            serial_number=f"C-{number}",
            status=DeviceStatus.AVAILABLE,
        )
        self.cable_repo.add(cable)
        logger.info("Cable added", extra={"context": {"cable_id": cable.id}})
        return cable

    def rename_serial(self, resource_id: str, new_serial: str, is_cable: bool) -> None:
        if not isinstance(new_serial, str) or not new_serial.strip():
            raise ValidationError("Serial number cannot be empty", "serial_number")
        resource = self._require(resource_id, is_cable)
        resource.serial_number = new_serial.strip()
        self._repo(is_cable).update(resource)

    def remove_resource(self, resource_id: str, is_cable: bool) -> None:
        """Delete a holter or cable that no open appointment references.

        Unknown ids are ignored. A resource referenced by any appointment that
        is not Completed raises ``ConflictError``.
        """
        for appointment in self.appointment_repo.get_by_resource(resource_id, is_cable):
            if appointment.holds_resources:
                raise ConflictError(
                    f"{_label(is_cable)} '{resource_id}' is still assigned to "
                    f"appointment '{appointment.id}'",
                    resource_id=resource_id,
                    appointment_id=appointment.id,
                )
        if self._repo(is_cable).delete(resource_id):
            logger.info(
                f"{_label(is_cable)} removed",
                extra={"context": {"resource_id": resource_id}},
            )

    def list_devices(self) -> List[Device]:
        return self.device_repo.list_all()

    def list_cables(self) -> List[Cable]:
        return self.cable_repo.list_all()

    def get_device(self, device_id: str) -> Optional[Device]:
        return self.device_repo.get_by_id(device_id)

    def get_cable(self, cable_id: str) -> Optional[Cable]:
        return self.cable_repo.get_by_id(cable_id)

    def serial_for(self, resource_id: str, is_cable: bool) -> str:
        """Serial number for display, or ``"N/A"`` once the resource is removed."""
        resource = self._repo(is_cable).get_by_id(resource_id)
        return resource.serial_number if resource else MISSING_SERIAL

    def mark_in_use(self, holter_id: str, cable_id: str) -> None:
        self._set_status(holter_id, cable_id, DeviceStatus.IN_USE)

    def mark_available(self, holter_id: str, cable_id: str) -> None:
        self._set_status(holter_id, cable_id, DeviceStatus.AVAILABLE)

    def _set_status(self, holter_id: str, cable_id: str, status: DeviceStatus) -> None:
        # Removed resources are skipped silently
        holter = self.device_repo.get_by_id(holter_id)
        if holter:
            holter.status = status
            self.device_repo.update(holter)
        cable = self.cable_repo.get_by_id(cable_id)
        if cable:
            cable.status = status
            self.cable_repo.update(cable)

    def _repo(self, is_cable: bool):
        return self.cable_repo if is_cable else self.device_repo

    def _require(self, resource_id: str, is_cable: bool):
        resource = self._repo(is_cable).get_by_id(resource_id)
        if resource is None:
            raise NotFoundError(_label(is_cable), resource_id)
        return resource


def _label(is_cable: bool) -> str:
    return "Cable" if is_cable else "Holter"
