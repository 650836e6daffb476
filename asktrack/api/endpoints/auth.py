from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from asktrack.core.security import create_access_token
from asktrack.db.session import get_remk_db
from asktrack.schemas.auth import HealthResponse, LoginRequest, LoginResponse
from asktrack.services.auth import authenticate_installer

router = APIRouter()

@router.get("/test", response_model=HealthResponse)
async def test():
    """Проверка доступности API (и CORS) без авторизации."""
    return {"message": "CORS is working!", "timestamp": datetime.now(timezone.utc)}

@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, db: AsyncSession = Depends(get_remk_db)):
    """
    Вход монтажника.
    - **Int_number**: номер
    - **Int_code**: код
    - **Int_pass**: пароль
    - **Возвращает**: JWT-токен и данные монтажника, если всё совпало
    """
    installer = await authenticate_installer(db, request.Int_number, request.Int_code, request.Int_pass)
    token = create_access_token(installer)

    return {
        "message": "Login successful",
        "token": token,
        "Int_number": installer.number,
        "Int_code": installer.code,
        "Int_type": installer.type,
        "Int_Branch": installer.branch,
    }
