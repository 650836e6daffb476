import enum
from sqlalchemy import Column, String, Boolean
from asktrack.db.session import GpsBase


class DeviceStatus(str, enum.Enum):
    """Статус устройства. В таблице хранится как nullable-флаг isinstalled."""
    PENDING = "Pending"
    PROCESSING = "Processing"
    REJECTED = "Rejected"

    @classmethod
    def from_flag(cls, flag: bool | None) -> "DeviceStatus":
        if flag is None:
            return cls.PENDING
        return cls.REJECTED if flag else cls.PROCESSING

    @property
    def flag(self) -> bool | None:
        return {
            DeviceStatus.PENDING: None,
            DeviceStatus.PROCESSING: False,
            DeviceStatus.REJECTED: True,
        }[self]


class Device(GpsBase):
    __tablename__ = "UserInfo"

    device_id = Column("Device ID", String, primary_key=True)
    group_account = Column("GroupAccount", String, nullable=True, index=True)
    phone_number = Column("PhoneNumber", String, nullable=True)
    isinstalled = Column("isinstalled", Boolean, nullable=True)  # null = pending, false = processing, true = rejected

    @property
    def status(self) -> DeviceStatus:
        return DeviceStatus.from_flag(self.isinstalled)
