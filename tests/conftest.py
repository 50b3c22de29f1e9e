import os
from datetime import datetime, timedelta

os.environ.setdefault("TASKFLOW_ENV", "test")
os.environ.setdefault("ENABLE_PROMETHEUS", "false")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskflow.domain.task_template import CurrentUser
from taskflow.persistence import models  # noqa: F401
from taskflow.persistence.database import Base


class TickingClock:
    """每次调用前进一秒, 让创建时间可预测"""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 8, 0, 0)):
        self.current = start

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'taskflow_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def user():
    return CurrentUser(user_id="user-1")
