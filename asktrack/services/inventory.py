import logging
from typing import Callable
from sqlalchemy.ext.asyncio import AsyncSession
from asktrack.core.exceptions import DeviceNotFound, StatusConflict
from asktrack.db.models.device import Device, DeviceStatus
from asktrack.db.repositories.device import get_branch_device, get_devices_by_branch, set_device_status

logger = logging.getLogger(__name__)

# Из какого статуса разрешён переход.
# Reject допускается и из Processing, acknowledge только из Pending.
ACKNOWLEDGE_FROM = (DeviceStatus.PENDING,)
REJECT_FROM = (DeviceStatus.PENDING, DeviceStatus.PROCESSING)


async def list_branch_devices(db: AsyncSession, branch: str) -> list[Device]:
    logger.info("Fetching inventory for branch: %s", branch)
    devices = await get_devices_by_branch(db, branch)
    logger.info("Found %d devices for branch %s", len(devices), branch)
    return devices

def summarize_statuses(devices: list[Device]) -> dict[str, int]:
    summary = {"pending": 0, "processing": 0, "rejected": 0}
    for device in devices:
        summary[device.status.name.lower()] += 1
    return summary


def _acknowledge_conflict(status: DeviceStatus) -> StatusConflict:
    return StatusConflict(f"Device is already {status.value}.", current_status=status)

def _reject_conflict(status: DeviceStatus) -> StatusConflict:
    return StatusConflict("Device is already rejected.", current_status=status)


async def _transition(
    db: AsyncSession,
    device_id: str,
    branch: str,
    new_status: DeviceStatus,
    allowed_from: tuple[DeviceStatus, ...],
    conflict: Callable[[DeviceStatus], StatusConflict],
) -> Device:
    device = await get_branch_device(db, device_id, branch)
    if device is None:
        logger.warning("Device %s not found for branch %s", device_id, branch)
        raise DeviceNotFound()

    old_status = device.status
    if old_status not in allowed_from:
        logger.warning("Device %s is already in %s status", device_id, old_status.value)
        raise conflict(old_status)

    # Условный UPDATE: если кто-то успел поменять статус между чтением и записью,
    # строка не обновится, и мы ответим по свежему состоянию
    if not await set_device_status(db, device_id, branch, new_status, allowed_from):
        await db.rollback()
        device = await get_branch_device(db, device_id, branch)
        if device is None:
            raise DeviceNotFound()
        logger.warning("Device %s changed concurrently, now %s", device_id, device.status.value)
        raise conflict(device.status)

    await db.commit()
    device = await get_branch_device(db, device_id, branch)
    logger.info(
        "Device %s status changed from %s to %s", device_id, old_status.value, new_status.value
    )
    return device

async def acknowledge_device(db: AsyncSession, device_id: str, branch: str) -> Device:
    """Pending -> Processing."""
    logger.info("Acknowledging device %s for branch %s", device_id, branch)
    return await _transition(
        db, device_id, branch, DeviceStatus.PROCESSING, ACKNOWLEDGE_FROM, _acknowledge_conflict
    )

async def reject_device(db: AsyncSession, device_id: str, branch: str) -> Device:
    """Pending или Processing -> Rejected."""
    logger.info("Rejecting device %s for branch %s", device_id, branch)
    return await _transition(
        db, device_id, branch, DeviceStatus.REJECTED, REJECT_FROM, _reject_conflict
    )
