from sqlalchemy import or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from asktrack.db.models.device import Device, DeviceStatus

async def get_devices_by_branch(db: AsyncSession, branch: str) -> list[Device]:
    result = await db.execute(
        select(Device)
        .where(Device.group_account == branch)
        .order_by(Device.device_id.desc())
    )
    return list(result.scalars().all())

async def get_branch_device(db: AsyncSession, device_id: str, branch: str) -> Device | None:
    """Устройство чужого филиала считается ненайденным."""
    result = await db.execute(
        select(Device)
        .where(Device.device_id == device_id)
        .where(Device.group_account == branch)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()

def _status_condition(status: DeviceStatus):
    if status.flag is None:
        return Device.isinstalled.is_(None)
    return Device.isinstalled == status.flag

async def set_device_status(
    db: AsyncSession,
    device_id: str,
    branch: str,
    new_status: DeviceStatus,
    expected: tuple[DeviceStatus, ...],
) -> bool:
    """
    Условное обновление: статус меняется только если текущий входит в expected.
    Возвращает False, если ни одна строка не обновилась (устройства нет
    или статус успели поменять параллельно). Коммит остаётся за вызывающим.
    """
    query = (
        update(Device)
        .where(Device.device_id == device_id)
        .where(Device.group_account == branch)
        .where(or_(*[_status_condition(status) for status in expected]))
        .values(isinstalled=new_status.flag)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(query)
    return result.rowcount > 0
