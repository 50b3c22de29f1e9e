import pytest
import pytest_asyncio
from sqlalchemy import Column, Integer, String
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from taskflow.persistence.repositories.base_repository import BaseRepository

# 定义一个临时模型用于测试
TestBase = declarative_base()

class SampleEntity(TestBase):
    __tablename__ = "sample_entities"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)


@pytest_asyncio.fixture
async def sample_session(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'base_repo.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(TestBase.metadata.create_all)
    async with async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)() as session:
        yield session
    await engine.dispose()


@pytest.mark.asyncio
async def test_add_and_commit(sample_session: AsyncSession):
    repo = BaseRepository(sample_session, SampleEntity)

    created = await repo.add(SampleEntity(name="First"))
    await repo.commit()
    assert created.id is not None

    fetched = await repo.get_by_id(created.id)
    assert fetched is not None
    assert fetched.name == "First"


@pytest.mark.asyncio
async def test_add_all_and_list_by_ids(sample_session: AsyncSession):
    repo = BaseRepository(sample_session, SampleEntity)

    a, b, c = await repo.add_all([SampleEntity(name="a"), SampleEntity(name="b"), SampleEntity(name="c")])
    await repo.commit()

    found = await repo.list_by_ids([a.id, c.id])
    assert sorted(e.name for e in found) == ["a", "c"]
    assert await repo.list_by_ids([]) == []


@pytest.mark.asyncio
async def test_delete_where(sample_session: AsyncSession):
    repo = BaseRepository(sample_session, SampleEntity)
    await repo.add_all([SampleEntity(name="keep"), SampleEntity(name="drop"), SampleEntity(name="drop")])
    await repo.commit()

    removed = await repo.delete_where(SampleEntity.name == "drop")
    await repo.commit()

    assert removed == 2
    remaining = await repo.list_by_ids([1, 2, 3])
    assert [e.name for e in remaining] == ["keep"]
