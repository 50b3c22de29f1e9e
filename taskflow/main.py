"""FastAPI entrypoint for the task template store."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskflow.config import ENABLE_PROMETHEUS
from taskflow.interfaces.api.task_template_endpoints import router as template_router, standard_response
from taskflow.observability.prometheus_metrics import router as metrics_router
from taskflow.persistence.database import create_all
from taskflow.service.exceptions import BusinessError
from taskflow.utils.logger import configure_logging

# ──────────────────────── logging ──────────────────────────
configure_logging()
logger = logging.getLogger(__name__)

# ─────────────────── lifespan context manager ──────────────

@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore[valid-type]
    """创建数据库 schema（仅首次）"""
    await create_all()
    logger.info("Database schema ready")
    yield

# ───────────────────────── FastAPI app ─────────────────────

app = FastAPI(title="TaskFlow API", description="Task template workflow store", lifespan=lifespan)

if ENABLE_PROMETHEUS:
    app.include_router(metrics_router)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(template_router)


@app.exception_handler(BusinessError)
async def business_error_handler(request: Request, exc: BusinessError) -> JSONResponse:
    logger.info("Business rule violated on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=400, content=standard_response(status="error", message=exc.message))


@app.get("/")
async def root():  # pragma: no cover
    return {"message": "TaskFlow API is running"}


# ─────────────────────────── run uvicorn ────────────────────
if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=False)
