from pydantic import BaseModel
from asktrack.db.models.device import DeviceStatus

class DeviceRead(BaseModel):
    deviceId: str
    groupAccount: str
    phoneNumber: str
    isinstalled: bool | None  # null = pending, false = processing, true = rejected

    @classmethod
    def from_device(cls, device) -> "DeviceRead":
        return cls(
            deviceId=device.device_id or "",
            groupAccount=device.group_account or "",
            phoneNumber=device.phone_number or "",
            isinstalled=device.isinstalled,
        )

class StatusSummary(BaseModel):
    pending: int
    processing: int
    rejected: int

class BranchInventory(BaseModel):
    branch: str
    deviceCount: int
    devices: list[DeviceRead]

class InventoryWithSummary(BranchInventory):
    statusSummary: StatusSummary

class StatusChangeResponse(BaseModel):
    message: str
    deviceId: str
    newStatus: DeviceStatus
