# tests/conftest.py

"""
테스트 공용 픽스처 모듈입니다.

- 테스트마다 독립적인 인메모리 SQLite(aiosqlite) 엔진을 생성하고,
  도메인 스키마(ven, veh, inv, trx)를 ATTACH 하여 PostgreSQL 스키마 구성을 흉내냅니다.
- `db_session`: 매니저/CRUD를 직접 호출하는 테스트용 비동기 세션
- `client`: `deps.get_db_session`을 테스트 세션으로 오버라이드한 httpx AsyncClient
"""

import os
from typing import AsyncGenerator

os.environ.setdefault("APP_ENV", "testing")

import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from fixparts.main import app as main_app  # noqa: E402
from fixparts.core import dependencies as deps  # noqa: E402
from fixparts.core.database import SCHEMA  # noqa: E402

# --- 모든 모델 임포트 ---
# SQLModel.metadata.create_all()이 모든 테이블을 인식하려면 모델 클래스가 한 번 이상 임포트되어야 합니다.
from fixparts.domains import models  # noqa: E402, F401

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# --- 데이터베이스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    테스트 함수마다 새 인메모리 데이터베이스를 만들고 모든 테이블을 생성합니다.
    StaticPool로 단일 연결을 공유하므로 ATTACH 한 스키마가 테스트 동안 유지됩니다.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _attach_schemas(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        for schema_name in SCHEMA:
            cursor.execute(f"ATTACH DATABASE ':memory:' AS {schema_name}")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """테스트용 비동기 데이터베이스 세션을 제공합니다."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with TestingSessionLocal() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    데이터베이스 세션 의존성을 테스트 세션으로 오버라이드한 비동기 HTTP 클라이언트입니다.
    """
    async def override_get_session():
        yield db_session

    original_overrides = main_app.dependency_overrides.copy()
    main_app.dependency_overrides[deps.get_db_session] = override_get_session

    transport = ASGITransport(app=main_app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as test_client:
            yield test_client
    finally:
        main_app.dependency_overrides = original_overrides
