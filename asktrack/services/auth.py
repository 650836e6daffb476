import logging
from sqlalchemy.ext.asyncio import AsyncSession
from asktrack.core.exceptions import InvalidCredentials
from asktrack.core.security import DUMMY_PASSWORD_HASH, is_legacy_password, verify_password
from asktrack.db.models.installer import Installer
from asktrack.db.repositories.installer import get_installers_by_login

logger = logging.getLogger(__name__)

async def authenticate_installer(db: AsyncSession, number: str, code: str, password: str) -> Installer:
    """
    Ищет монтажника по номеру, коду и паролю.
    На любое несовпадение один и тот же ответ, чтобы не подсказывать,
    какое именно поле неверно.
    """
    candidates = await get_installers_by_login(db, number, code)
    if not candidates:
        verify_password(password, DUMMY_PASSWORD_HASH)

    for installer in candidates:
        if verify_password(password, installer.password):
            if is_legacy_password(installer.password):
                logger.warning("Installer %s authenticated with a plaintext password", installer.id)
            return installer

    logger.info("Failed login attempt for installer number %s", number)
    raise InvalidCredentials()
