import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from taskflow.main import app
from taskflow.persistence.database import Base, get_db_session


@pytest.fixture
def client(tmp_path):
    # NullPool: TestClient 在自己的事件循环里跑, 连接不能跨循环复用
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'taskflow_api.db'}",
        poolclass=NullPool,
    )

    async def create_tables():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_tables())
    session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
