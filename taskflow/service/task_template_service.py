# taskflow/service/task_template_service.py

import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.domain.task_template import (
    CurrentUser,
    PagedResult,
    TaskTemplateDto,
    TaskTemplateFormDto,
    TaskTemplateStage,
    TaskTemplateStepDto,
    TemplateSearchFilter,
)
from taskflow.observability import prometheus_metrics as metrics
from taskflow.persistence.models import (
    AuditStamp,
    TaskTemplate,
    TaskTemplateForm,
    TaskTemplateStep,
    TaskTemplateStepOperate,
)
from taskflow.persistence.repositories.task_template_form_repository import TaskTemplateFormRepository
from taskflow.persistence.repositories.task_template_repository import TaskTemplateRepository
from taskflow.persistence.repositories.task_template_step_repository import TaskTemplateStepRepository
from taskflow.service.exceptions import BusinessError
from taskflow.utils.text import is_blank, is_not_blank
from taskflow.utils.timefmt import utcnow

logger = logging.getLogger(__name__)

TEMPLATE_NAME_REQUIRED = "template name must not be empty"


def _new_id() -> str:
    return str(uuid.uuid4())


def _distinct(values: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(values))


class TaskTemplateService:
    """
    任务流模板: 模板头信息、表单列表、步骤/操作列表的读写.
    每个公开方法是一个工作单元, 结束时 commit 一次.
    """

    def __init__(
        self,
        template_repo: TaskTemplateRepository,
        form_repo: TaskTemplateFormRepository,
        step_repo: TaskTemplateStepRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.template_repo = template_repo
        self.form_repo = form_repo
        self.step_repo = step_repo
        self.clock = clock

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        clock: Callable[[], datetime] = utcnow,
    ) -> "TaskTemplateService":
        return cls(
            TaskTemplateRepository(session),
            TaskTemplateFormRepository(session),
            TaskTemplateStepRepository(session),
            clock=clock,
        )

    def _stamp(self, user: CurrentUser) -> AuditStamp:
        return AuditStamp.now(user.user_id, clock=self.clock)

    # ─────────────────────────── 写操作 ───────────────────────────

    async def create_or_rename(self, template: TaskTemplateDto, user: CurrentUser) -> str:
        """
        id 为空时新建模板, 否则只修改已有模板的名称.
        id 不存在时什么都不做, 原样返回提交的 id.
        """
        if is_blank(template.name):
            raise BusinessError(TEMPLATE_NAME_REQUIRED)

        if is_not_blank(template.id):
            existing = await self.template_repo.get_by_id(template.id)
            if existing is None:
                logger.warning("Rename ignored, task template %s not found", template.id)
                return template.id
            existing.name = template.name
            await self.template_repo.commit()
            logger.info("Task template %s renamed by %s", template.id, user.user_id)
            return template.id

        record = TaskTemplate(
            id=_new_id(),
            name=template.name,
            stage=TaskTemplateStage.SAVE.value,
            audit=self._stamp(user),
        )
        await self.template_repo.add(record)
        await self.template_repo.commit()
        metrics.template_created.inc()
        logger.info("Task template %s created by %s", record.id, user.user_id)
        return record.id

    async def replace_forms(self, forms: Sequence[TaskTemplateFormDto], user: CurrentUser) -> None:
        """
        用新的表单列表整体替换相关模板的表单, order 按提交顺序从 1 重新编号.
        """
        if not forms:
            return
        template_ids = _distinct([form.template_id for form in forms])
        await self.template_repo.set_stage(template_ids, TaskTemplateStage.DESIGN_FORMS.value)

        removed = await self.form_repo.delete_by_template_ids(template_ids)

        records = [
            self._to_form_record(form, order, user)
            for order, form in enumerate(forms, start=1)
        ]
        await self.form_repo.add_all(records)
        await self.form_repo.commit()

        metrics.forms_replaced.inc(len(records))
        logger.info(
            "Forms replaced for templates %s: removed=%d inserted=%d",
            template_ids, removed, len(records),
        )

    async def replace_steps(self, steps: Sequence[TaskTemplateStepDto], user: CurrentUser) -> None:
        """
        用新的步骤列表整体替换相关模板的步骤和操作.
        提交的 order 统一 +1, 名称为空的操作直接丢弃.
        """
        if not steps:
            return
        template_ids = _distinct([step.template_id for step in steps])
        await self.template_repo.set_stage(template_ids, TaskTemplateStage.DESIGN_STEPS.value)

        submitted_ids = [step.id for step in steps if is_not_blank(step.id)]
        stale_ids = await self.step_repo.list_ids_for_replace(template_ids, submitted_ids)
        removed = await self.step_repo.delete_with_operates(sorted(stale_ids))

        records = [self._to_step_record(step, user) for step in steps]
        await self.step_repo.add_all(records)
        await self.step_repo.commit()

        metrics.steps_replaced.inc(len(records))
        logger.info(
            "Steps replaced for templates %s: removed=%d inserted=%d",
            template_ids, removed, len(records),
        )

    # ─────────────────────────── 读操作 ───────────────────────────

    async def search(self, filters: TemplateSearchFilter) -> PagedResult[TaskTemplateDto]:
        page = max(filters.page, 1)
        rows = max(filters.rows, 1)
        keywords = filters.keywords if is_not_blank(filters.keywords) else None

        found, total = await self.template_repo.search(keywords, (page - 1) * rows, rows)
        return PagedResult[TaskTemplateDto](
            items=[TaskTemplateDto.model_validate(dict(row)) for row in found],
            total=total,
            page=page,
            rows=rows,
        )

    async def get_template(self, template_id: Optional[str]) -> Optional[TaskTemplateDto]:
        if is_blank(template_id):
            return None
        row = await self.template_repo.get_summary(template_id)
        if row is None:
            return None
        return TaskTemplateDto.model_validate(dict(row))

    async def get_forms(self, template_id: str) -> List[TaskTemplateFormDto]:
        forms = await self.form_repo.list_by_template(template_id)
        return [TaskTemplateFormDto.model_validate(form) for form in forms]

    async def get_steps(self, template_id: str) -> List[TaskTemplateStepDto]:
        steps = await self.step_repo.list_by_template(template_id)
        return [TaskTemplateStepDto.model_validate(step) for step in steps]

    # ─────────────────────────── DTO -> 记录 ───────────────────────────

    def _to_form_record(self, form: TaskTemplateFormDto, order: int, user: CurrentUser) -> TaskTemplateForm:
        return TaskTemplateForm(
            id=form.id if is_not_blank(form.id) else _new_id(),
            template_id=form.template_id,
            order=order,
            name=form.name,
            content=form.content,
            audit=self._stamp(user),
        )

    def _to_step_record(self, step: TaskTemplateStepDto, user: CurrentUser) -> TaskTemplateStep:
        step_id = step.id if is_not_blank(step.id) else _new_id()
        record = TaskTemplateStep(
            id=step_id,
            template_id=step.template_id,
            order=step.order + 1,
            name=step.name,
            audit=self._stamp(user),
        )
        kept = [operate for operate in step.operates if is_not_blank(operate.name)]
        record.operates = [
            TaskTemplateStepOperate(
                id=operate.id if is_not_blank(operate.id) else _new_id(),
                step_id=step_id,
                order=order,
                name=operate.name,
                audit=self._stamp(user),
            )
            for order, operate in enumerate(kept, start=1)
        ]
        return record
