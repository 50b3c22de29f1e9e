# taskflow/domain/task_template.py

"""
任务流模板的传输对象 (读写共用).

写入时由 service 把字段拷贝到 ORM 记录上; 读取时由查询层
直接从查询结果构造, 与 ORM 记录的结构解耦.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from taskflow.config import DEFAULT_PAGE_SIZE

T = TypeVar("T")


class TaskTemplateStage(str, Enum):
    SAVE = "save"
    DESIGN_FORMS = "design_forms"
    DESIGN_STEPS = "design_steps"


class CurrentUser(BaseModel):
    user_id: str


class TaskTemplateDto(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    stage: Optional[TaskTemplateStage] = None
    creator_id: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TaskTemplateFormDto(BaseModel):
    id: Optional[str] = None
    template_id: str
    order: int = 0  # 写入时会被重新编号
    name: Optional[str] = None
    content: Optional[Any] = None  # 任意 JSON, 不做校验
    creator_id: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TaskTemplateStepOperateDto(BaseModel):
    id: Optional[str] = None
    step_id: Optional[str] = None
    order: int = 0  # 写入时按提交顺序重新编号
    name: Optional[str] = None
    creator_id: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TaskTemplateStepDto(BaseModel):
    id: Optional[str] = None
    template_id: str
    order: int = 0
    name: Optional[str] = None
    operates: List[TaskTemplateStepOperateDto] = Field(default_factory=list)
    creator_id: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TemplateSearchFilter(BaseModel):
    keywords: Optional[str] = None
    page: int = 1
    rows: int = DEFAULT_PAGE_SIZE


class PagedResult(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    rows: int
