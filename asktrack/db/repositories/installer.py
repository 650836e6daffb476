from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from asktrack.db.models.installer import Installer

async def get_installers_by_login(db: AsyncSession, number: str, code: str) -> list[Installer]:
    """
    Все монтажники с данной парой (номер, код).
    Пароль проверяется уже в сервисе, т.к. в базе лежит хэш.
    """
    result = await db.execute(
        select(Installer)
        .where(Installer.number == number)
        .where(Installer.code == code)
        .order_by(Installer.id)
    )
    return list(result.scalars().all())
