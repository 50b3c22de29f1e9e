from typing import Any, List, Optional, Sequence, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.engine import RowMapping

from taskflow.persistence.models import TaskTemplate
from taskflow.persistence.repositories.base_repository import BaseRepository

# 列表/详情只查询这些列, 不加载完整实体
SUMMARY_COLUMNS = (
    TaskTemplate.id,
    TaskTemplate.name,
    TaskTemplate.stage,
    TaskTemplate.creator_id,
    TaskTemplate.created_at,
)


class TaskTemplateRepository(BaseRepository[TaskTemplate]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, TaskTemplate)

    async def set_stage(self, template_ids: Sequence[str], stage: str) -> List[TaskTemplate]:
        templates = await self.list_by_ids(template_ids)
        for template in templates:
            template.set_stage(stage)
        return templates

    async def get_summary(self, template_id: str) -> Optional[RowMapping]:
        stmt = select(*SUMMARY_COLUMNS).where(TaskTemplate.id == template_id)
        result = await self.session.execute(stmt)
        return result.mappings().first()

    async def search(
        self,
        keywords: Optional[str],
        offset: int,
        limit: int,
    ) -> Tuple[List[RowMapping], int]:
        criteria: List[Any] = []
        if keywords:
            criteria.append(TaskTemplate.name.contains(keywords, autoescape=True))

        count_stmt = select(func.count()).select_from(TaskTemplate).where(*criteria)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(*SUMMARY_COLUMNS)
            .where(*criteria)
            .order_by(TaskTemplate.created_at.desc(), TaskTemplate.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.mappings().all()), total
