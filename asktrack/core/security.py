import logging
from datetime import datetime, timedelta, timezone
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from asktrack.core.config import settings
from asktrack.core.exceptions import InvalidToken

logger = logging.getLogger(__name__)

# plaintext оставлен только для старых записей в таблице installers
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "plaintext"], deprecated=["plaintext"])
bearer_scheme = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    """
    Хэш для колонки Int_pass. Сервис сам монтажников не создаёт:
    вызывается при заведении записей вне API (и в тестовых фикстурах).
    """
    return pwd_context.hash(password)

# Проверяется, когда пары (номер, код) нет, чтобы время ответа не выдавало причину отказа
DUMMY_PASSWORD_HASH = get_password_hash("asktrack-no-such-installer")

def verify_password(plain_password: str, stored_password: str) -> bool:
    if not stored_password:
        return False
    try:
        return pwd_context.verify(plain_password, stored_password)
    except ValueError:
        # строка в базе не похожа ни на одну из схем
        logger.warning("Unrecognized password format in credential store")
        return False

def is_legacy_password(stored_password: str) -> bool:
    return pwd_context.identify(stored_password) == "plaintext"


def create_access_token(installer, expires_delta: timedelta | None = None) -> str:
    """
    JWT с идентификатором монтажника и его филиалом.
    Филиал (claim "branch") потом ограничивает все запросы к инвентарю.
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims = {
        "Int_number": installer.number or "",
        "Int_code": installer.code or "",
        "role": installer.type or "",
        "branch": installer.branch or "",
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_token(token: str) -> dict:
    """Проверяет подпись, issuer, audience и срок действия."""
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError as e:
        logger.info("Token rejected: %s", e)
        raise InvalidToken()

def decode_access_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    if credentials is None or not credentials.credentials:
        raise InvalidToken("Not authenticated")
    return decode_token(credentials.credentials)
