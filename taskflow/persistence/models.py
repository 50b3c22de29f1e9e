# taskflow/persistence/models.py

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Column, String, DateTime, JSON, Integer,
    ForeignKey, Index, text
)
from sqlalchemy.orm import composite, relationship

from taskflow.domain.task_template import TaskTemplateStage
from taskflow.persistence.database import Base
from taskflow.utils.timefmt import utcnow


@dataclass(frozen=True)
class AuditStamp:
    """
    创建者 + 创建时间, 作为值对象嵌入每一条记录.
    """
    creator_id: Optional[str]
    created_at: Optional[datetime]

    @classmethod
    def now(cls, user_id: str, clock=utcnow) -> "AuditStamp":
        return cls(creator_id=user_id, created_at=clock())

    def __composite_values__(self):
        return self.creator_id, self.created_at


# -----------------------
# task_templates
# -----------------------
class TaskTemplate(Base):
    __tablename__ = "task_templates"
    __table_args__ = (
        Index("idx_task_templates_created", "created_at"),
    )

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    stage = Column(String(32), nullable=False, server_default=text(f"'{TaskTemplateStage.SAVE.value}'"))
    creator_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, nullable=False)

    audit = composite(AuditStamp, creator_id, created_at)

    def set_stage(self, stage: str) -> None:
        self.stage = stage


# -----------------------
# task_template_forms
# -----------------------
class TaskTemplateForm(Base):
    __tablename__ = "task_template_forms"
    __table_args__ = (
        Index("idx_task_forms_template_order", "template_id", "order"),
    )

    id = Column(String(36), primary_key=True)
    template_id = Column(String(36), nullable=False)  # 不建外键, 允许引用不存在的模板
    order = Column(Integer, nullable=False)
    name = Column(String(255), nullable=True)
    content = Column(JSON, nullable=True)  # 表单定义, 内容不做校验
    creator_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, nullable=False)

    audit = composite(AuditStamp, creator_id, created_at)


# -----------------------
# task_template_steps
# -----------------------
class TaskTemplateStep(Base):
    __tablename__ = "task_template_steps"
    __table_args__ = (
        Index("idx_task_steps_template_order", "template_id", "order"),
    )

    id = Column(String(36), primary_key=True)
    template_id = Column(String(36), nullable=False)  # 不建外键, 允许引用不存在的模板
    order = Column(Integer, nullable=False)
    name = Column(String(255), nullable=True)
    creator_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, nullable=False)

    audit = composite(AuditStamp, creator_id, created_at)
    # 1个step 对应多个 operate
    operates = relationship(
        "TaskTemplateStepOperate",
        back_populates="step",
        cascade="all, delete-orphan",
        order_by="TaskTemplateStepOperate.order",
    )


# -----------------------
# task_template_step_operates
# -----------------------
class TaskTemplateStepOperate(Base):
    __tablename__ = "task_template_step_operates"
    __table_args__ = (
        Index("idx_task_operates_step", "step_id"),
    )

    id = Column(String(36), primary_key=True)
    step_id = Column(String(36), ForeignKey("task_template_steps.id"), nullable=False)
    order = Column(Integer, nullable=False, server_default=text("0"))  # 步骤内的提交顺序
    name = Column(String(255), nullable=False)
    creator_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, nullable=False)

    audit = composite(AuditStamp, creator_id, created_at)

    step = relationship("TaskTemplateStep", back_populates="operates")
