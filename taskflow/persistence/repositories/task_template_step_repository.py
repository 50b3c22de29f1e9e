from typing import List, Sequence, Set
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from sqlalchemy.orm import selectinload

from taskflow.persistence.models import TaskTemplateStep, TaskTemplateStepOperate
from taskflow.persistence.repositories.base_repository import BaseRepository

class TaskTemplateStepRepository(BaseRepository[TaskTemplateStep]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, TaskTemplateStep)

    async def list_ids_for_replace(
        self,
        template_ids: Sequence[str],
        step_ids: Sequence[str],
    ) -> Set[str]:
        """
        需要被替换掉的旧 step: 属于这些模板的, 以及 id 与新提交 step 相同的
        """
        stmt = select(TaskTemplateStep.id).where(
            or_(
                TaskTemplateStep.template_id.in_(template_ids),
                TaskTemplateStep.id.in_(step_ids),
            )
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def delete_with_operates(self, step_ids: Sequence[str]) -> int:
        """先删 operate, 再删 step 本身"""
        if not step_ids:
            return 0
        await self.delete_operates(step_ids)
        return await self.delete_where(TaskTemplateStep.id.in_(step_ids))

    async def delete_operates(self, step_ids: Sequence[str]) -> int:
        operate_repo = BaseRepository(self.session, TaskTemplateStepOperate)
        return await operate_repo.delete_where(TaskTemplateStepOperate.step_id.in_(step_ids))

    async def list_by_template(self, template_id: str) -> List[TaskTemplateStep]:
        stmt = (
            select(TaskTemplateStep)
            .options(selectinload(TaskTemplateStep.operates))
            .where(TaskTemplateStep.template_id == template_id)
            .order_by(TaskTemplateStep.order)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
