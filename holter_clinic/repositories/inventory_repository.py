from typing import List, Optional

from ..domain.entities import Cable, Device
from ..domain.interfaces import ICableRepository, IDeviceRepository
from .base import InMemoryRepository


class DeviceRepository(InMemoryRepository[Device], IDeviceRepository):
    def __init__(self, devices: Optional[List[Device]] = None):
        super().__init__(devices)

    def add(self, device: Device) -> Device:
        if device.id in self._items:
            raise ValueError(f"Device '{device.id}' already exists")
        return self._store(device)

    def update(self, device: Device) -> Device:
        if device.id not in self._items:
            raise ValueError("Device not found")
        self._items[device.id] = device
        return device

    def delete(self, device_id: str) -> bool:
        return self._items.pop(device_id, None) is not None


class CableRepository(InMemoryRepository[Cable], ICableRepository):
    def __init__(self, cables: Optional[List[Cable]] = None):
        super().__init__(cables)

    def add(self, cable: Cable) -> Cable:
        if cable.id in self._items:
            raise ValueError(f"Cable '{cable.id}' already exists")
        return self._store(cable)

    def update(self, cable: Cable) -> Cable:
        if cable.id not in self._items:
            raise ValueError("Cable not found")
        self._items[cable.id] = cable
        return cable

    def delete(self, cable_id: str) -> bool:
        return self._items.pop(cable_id, None) is not None
