import logging
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from app.core.config import settings
from app.core.database import engine, Base
from app.core.errors import AppError, StoreUnavailable
from app.api import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Создаем таблицы
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Realty CRM API",
    description="API для CRM агентства недвижимости",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    # Некорректный запрос - 400, как и остальные ошибки валидации
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(SQLAlchemyError)
async def handle_store_error(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    error = StoreUnavailable()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


app.include_router(api_router)

# Загруженные вложения
Path(settings.ATTACHMENTS_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/attachments", StaticFiles(directory=settings.ATTACHMENTS_DIR), name="attachments")


@app.get("/")
def root():
    return {"message": "Realty CRM API", "version": "1.0.0"}


@app.get("/health")
def health():
    return {"status": "ok"}
