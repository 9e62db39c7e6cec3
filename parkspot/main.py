"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Middleware and router registration.
The marketplace API is served under /api and mirrored at the root path so
the static frontends can call either /api/listings or /listings.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from parkspot.config import settings
from parkspot.middleware.axiom_logging import AxiomLoggingMiddleware


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # 시작 시 테이블 생성 + 관리자 시드 (Schema and admin seeding on startup)
    if settings.INIT_DB_ON_STARTUP:
        from parkspot.seed import init_db

        await init_db()
    yield


app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Axiom 요청 로깅: CORS보다 먼저 등록하여 모든 요청을 캡처
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어: Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록: /api 하위 + 루트 경로 (루트 복사본은 OpenAPI에서 숨김)
# Router registration: /api prefix plus a root mirror hidden from the schema
# ---------------------------------------------------------------------------
from parkspot.api.routes import api_router  # noqa: E402

app.include_router(api_router, prefix="/api")
app.include_router(api_router, include_in_schema=False)
