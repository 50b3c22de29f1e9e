from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

from taskflow.config import DATABASE_URL, DB_ECHO

# ─────────────────────────────── 引擎和会话 ────────────────────────────────

engine_kwargs = {"echo": DB_ECHO, "future": True}
if not DATABASE_URL.startswith("sqlite"):
    # sqlite 使用 StaticPool / 文件连接池, 不接受这些参数
    engine_kwargs.update(pool_size=20, max_overflow=40, pool_timeout=30, pool_pre_ping=True)

async_engine = create_async_engine(DATABASE_URL, **engine_kwargs)

AsyncSessionLocal = sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=True,
)

Base = declarative_base()

# ─────────────────────────────── 会话工厂 ────────────────────────────────

async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    每个请求一个 session; 出错时回滚, 提交由 service 自己负责.
    """
    session = AsyncSessionLocal()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def create_all() -> None:
    # 延迟导入, 确保模型已注册到 Base.metadata
    from taskflow.persistence import models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all() -> None:
    from taskflow.persistence import models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
