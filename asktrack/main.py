import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from asktrack.core.config import settings
from asktrack.core.exceptions import AskTrackError
from asktrack.api.endpoints.auth import router as auth_router
from asktrack.api.endpoints.inventory import router as inventory_router
from asktrack.db.session import gps_engine, remk_engine, GpsBase, RemkBase
import asktrack.db.models.device  # noqa: F401
import asktrack.db.models.installer  # noqa: F401

# Настройка логирования
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)
api_prefix = settings.API_PREFIX

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)

# Register routers
app.include_router(auth_router, prefix=f"{api_prefix}/auth", tags=["auth"])
app.include_router(inventory_router, prefix=f"{api_prefix}/inventory", tags=["inventory"])


@app.exception_handler(AskTrackError)
async def asktrack_error_handler(request: Request, exc: AskTrackError):
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message}, headers=headers)

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )

def _internal_error_response(exc: Exception) -> JSONResponse:
    content = {"message": "Internal server error"}
    if settings.DEBUG:
        content["error"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)

@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return _internal_error_response(exc)

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    # Starlette после ответа всё равно пробрасывает исключение дальше (для сервера)
    logger.error("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
    return _internal_error_response(exc)


@app.on_event("startup")
async def startup():
    if not settings.CREATE_TABLES:
        return
    # Создаём недостающие таблицы в обеих базах
    async with remk_engine.begin() as conn:
        await conn.run_sync(RemkBase.metadata.create_all)
    async with gps_engine.begin() as conn:
        await conn.run_sync(GpsBase.metadata.create_all)
    logger.info("Startup event completed. Database tables created.")

@app.on_event("shutdown")
async def shutdown():
    await remk_engine.dispose()
    await gps_engine.dispose()
