# fixparts/main.py

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fixparts import API_PREFIX
from fixparts.core.config import settings
from fixparts.core.database import engine
from fixparts.core import dependencies as deps
from fixparts.core.exceptions import DomainError, ErrorKind

from fixparts.domains.ven.routers import router as ven_router
from fixparts.domains.veh.routers import router as veh_router
from fixparts.domains.inv.routers import router as inv_router
from fixparts.domains.trx.routers import router as trx_router
from fixparts.domains.rpt.routers import router as rpt_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG_MODE else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# 도메인 오류 종류 -> HTTP 상태 코드
ERROR_STATUS_CODES = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.DUPLICATE_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.DEPENDENCY_BLOCKED: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI 애플리케이션의 수명 주기 이벤트를 처리합니다.
    스키마/테이블 생성은 Alembic 또는 scripts/init_db.py가 담당합니다.
    """
    logger.info("%s 시작 (env=%s)", settings.APP_NAME, settings.APP_ENV)
    yield
    logger.info("%s 종료 중...", settings.APP_NAME)
    await engine.dispose()
    logger.info("데이터베이스 연결 풀 종료 완료.")


# -- FastAPI 애플리케이션 인스턴스 생성 --
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# -- CORS 미들웨어 설정 --
# 운영 환경에서는 'allow_origins'를 실제 프론트엔드 도메인으로 제한해야 합니다.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -- 도메인 예외 처리기 --
# 매니저가 발생시킨 DomainError를 오류 종류에 따라 HTTP 응답으로 변환합니다.
@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = ERROR_STATUS_CODES.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s %s 처리 실패: %r", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# -- 도메인 라우터 포함 --
app.include_router(ven_router, prefix=f"{API_PREFIX}/ven", tags=["Supplier Management (공급업체 관리)"])
app.include_router(veh_router, prefix=f"{API_PREFIX}/veh", tags=["Vehicle Management (차량 관리)"])
app.include_router(inv_router, prefix=f"{API_PREFIX}/inv", tags=["Inventory Management (재고 관리)"])
app.include_router(trx_router, prefix=f"{API_PREFIX}/trx", tags=["Transaction Management (거래 관리)"])
app.include_router(rpt_router, prefix=f"{API_PREFIX}/rpt", tags=["Report Management (보고서 관리)"])


# -- 루트 엔드포인트 --
@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    """
    FixParts API의 루트 엔드포인트입니다.
    """
    return {"message": "Welcome to FixParts Inventory API. Visit /docs for interactive API documentation."}


# -- 헬스 체크 엔드포인트 --
@app.get("/health-check", summary="Health Check", response_description="Status of the application and database connection.")
async def health_check(session: AsyncSession = Depends(deps.get_db_session)):
    """
    데이터베이스 연결을 테스트하여 서비스의 정상 작동 여부를 확인합니다.
    """
    try:
        result = await session.exec(select(1))
        if result.first():
            return {"status": "ok", "database_connection": "successful"}
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database health check failed: No result from test query"
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("헬스 체크 중 데이터베이스 오류")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database connection error during health check: {e}"
        )


# -- Uvicorn 서버 직접 실행 (개발용) --
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fixparts.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG_MODE, log_level="info")
