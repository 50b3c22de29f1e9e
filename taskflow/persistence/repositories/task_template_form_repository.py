from typing import List, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from taskflow.persistence.models import TaskTemplateForm
from taskflow.persistence.repositories.base_repository import BaseRepository

class TaskTemplateFormRepository(BaseRepository[TaskTemplateForm]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, TaskTemplateForm)

    async def delete_by_template_ids(self, template_ids: Sequence[str]) -> int:
        if not template_ids:
            return 0
        return await self.delete_where(TaskTemplateForm.template_id.in_(template_ids))

    async def list_by_template(self, template_id: str) -> List[TaskTemplateForm]:
        stmt = (
            select(TaskTemplateForm)
            .where(TaskTemplateForm.template_id == template_id)
            .order_by(TaskTemplateForm.order)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
