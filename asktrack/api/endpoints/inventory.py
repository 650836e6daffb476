import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from asktrack.api.deps import get_token_branch
from asktrack.core.exceptions import ValidationFailed
from asktrack.db.models.device import DeviceStatus
from asktrack.db.session import get_gps_db
from asktrack.schemas.inventory import (
    BranchInventory,
    DeviceRead,
    InventoryWithSummary,
    StatusChangeResponse,
)
from asktrack.services.inventory import (
    acknowledge_device,
    list_branch_devices,
    reject_device,
    summarize_statuses,
)

logger = logging.getLogger(__name__)

router = APIRouter()

def _require_device_id(device_id: str) -> None:
    if not device_id or not device_id.strip():
        raise ValidationFailed("Device ID is required")

@router.get("", response_model=InventoryWithSummary)
async def get_inventory(
    branch: str = Depends(get_token_branch),
    db: AsyncSession = Depends(get_gps_db)
):
    """Все устройства филиала из токена, со сводкой по статусам."""
    devices = await list_branch_devices(db, branch)
    summary = summarize_statuses(devices)
    logger.info(
        "Status distribution - Pending: %d, Processing: %d, Rejected: %d",
        summary["pending"], summary["processing"], summary["rejected"]
    )

    return {
        "branch": branch,
        "deviceCount": len(devices),
        "devices": [DeviceRead.from_device(d) for d in devices],
        "statusSummary": summary,
    }

@router.get("/branch/{branch_name}", response_model=BranchInventory)
async def get_inventory_by_branch(branch_name: str, db: AsyncSession = Depends(get_gps_db)):
    """То же самое без JWT, филиал передаётся в пути. Для тестов."""
    if not branch_name or not branch_name.strip():
        raise ValidationFailed("Branch name is required")

    devices = await list_branch_devices(db, branch_name)
    return {
        "branch": branch_name,
        "deviceCount": len(devices),
        "devices": [DeviceRead.from_device(d) for d in devices],
    }

@router.post("/acknowledge/{device_id}", response_model=StatusChangeResponse)
async def acknowledge(
    device_id: str,
    branch: str = Depends(get_token_branch),
    db: AsyncSession = Depends(get_gps_db)
):
    _require_device_id(device_id)
    await acknowledge_device(db, device_id, branch)
    return {
        "message": "Device acknowledged and set to Processing.",
        "deviceId": device_id,
        "newStatus": DeviceStatus.PROCESSING,
    }

@router.post("/reject/{device_id}", response_model=StatusChangeResponse)
async def reject(
    device_id: str,
    branch: str = Depends(get_token_branch),
    db: AsyncSession = Depends(get_gps_db)
):
    _require_device_id(device_id)
    await reject_device(db, device_id, branch)
    return {
        "message": "Device rejected successfully.",
        "deviceId": device_id,
        "newStatus": DeviceStatus.REJECTED,
    }
