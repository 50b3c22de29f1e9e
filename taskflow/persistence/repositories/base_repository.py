# taskflow/persistence/repositories/base_repository.py

from typing import Any, Iterable, Type, TypeVar, Optional, List, Generic
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

T = TypeVar('T')

class BaseRepository(Generic[T]):
    """
    通用异步仓储类.
    add / remove 只登记到 session, 由调用方统一 commit (一次调用 = 一个工作单元).
    """

    def __init__(self, session: AsyncSession, model_class: Type[T]):
        self.session = session
        self.model_class = model_class

    async def get_by_id(self, id_value: Any) -> Optional[T]:
        return await self.session.get(self.model_class, id_value)

    async def list_by_ids(self, ids: Iterable[Any]) -> List[T]:
        ids = list(ids)
        if not ids:
            return []
        column = getattr(self.model_class, self.get_id_attribute())
        result = await self.session.execute(select(self.model_class).where(column.in_(ids)))
        return list(result.scalars().all())

    async def add(self, entity: T) -> T:
        self.session.add(entity)
        return entity

    async def add_all(self, entities: Iterable[T]) -> List[T]:
        entities = list(entities)
        self.session.add_all(entities)
        return entities

    async def delete_where(self, *criteria) -> int:
        """批量删除, 返回删除行数"""
        stmt = (
            delete(self.model_class)
            .where(*criteria)
            .execution_options(synchronize_session="auto")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def commit(self) -> None:
        await self.session.commit()

    def get_id_attribute(self) -> str:
        return "id"
