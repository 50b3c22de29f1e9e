from fastapi import APIRouter, Depends, Header, HTTPException, Query
from typing import Optional, List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from taskflow.domain.task_template import (
    CurrentUser,
    TaskTemplateDto,
    TaskTemplateFormDto,
    TaskTemplateStepDto,
    TemplateSearchFilter,
)
from taskflow.persistence.database import get_db_session
from taskflow.service.task_template_service import TaskTemplateService

router = APIRouter(prefix="/task_templates", tags=["task_templates"])

# ----------- 通用返回封装 -----------

def standard_response(
    status: str = "ok",
    data: Optional[Any] = None,
    message: Optional[str] = None
) -> Dict[str, Any]:
    return {"status": status, "data": data, "message": message}


def get_service(db: AsyncSession = Depends(get_db_session)) -> TaskTemplateService:
    return TaskTemplateService.with_session(db)


async def get_current_user(x_user_id: str = Header(..., alias="X-User-Id")) -> CurrentUser:
    return CurrentUser(user_id=x_user_id)

# ----------- 接口定义 -----------

@router.get("/", response_model=Dict[str, Any])
async def search_templates(
    keywords: Optional[str] = None,
    page: int = Query(1, ge=1),
    rows: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    service: TaskTemplateService = Depends(get_service),
):
    result = await service.search(TemplateSearchFilter(keywords=keywords, page=page, rows=rows))
    return standard_response(data=result.model_dump(mode="json"))


@router.post("/", response_model=Dict[str, Any])
async def create_or_rename_template(
    template: TaskTemplateDto,
    user: CurrentUser = Depends(get_current_user),
    service: TaskTemplateService = Depends(get_service),
):
    template_id = await service.create_or_rename(template, user)
    return standard_response(data={"id": template_id}, message="Template saved")


@router.put("/forms", response_model=Dict[str, Any])
async def replace_forms(
    forms: List[TaskTemplateFormDto],
    user: CurrentUser = Depends(get_current_user),
    service: TaskTemplateService = Depends(get_service),
):
    await service.replace_forms(forms, user)
    return standard_response(message=f"{len(forms)} forms saved")


@router.put("/steps", response_model=Dict[str, Any])
async def replace_steps(
    steps: List[TaskTemplateStepDto],
    user: CurrentUser = Depends(get_current_user),
    service: TaskTemplateService = Depends(get_service),
):
    await service.replace_steps(steps, user)
    return standard_response(message=f"{len(steps)} steps saved")


@router.get("/{template_id}", response_model=Dict[str, Any])
async def get_template(
    template_id: str,
    service: TaskTemplateService = Depends(get_service),
):
    template = await service.get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return standard_response(data=template.model_dump(mode="json"))


@router.get("/{template_id}/forms", response_model=Dict[str, Any])
async def get_forms(
    template_id: str,
    service: TaskTemplateService = Depends(get_service),
):
    forms = await service.get_forms(template_id)
    return standard_response(data=[f.model_dump(mode="json") for f in forms])


@router.get("/{template_id}/steps", response_model=Dict[str, Any])
async def get_steps(
    template_id: str,
    service: TaskTemplateService = Depends(get_service),
):
    steps = await service.get_steps(template_id)
    return standard_response(data=[s.model_dump(mode="json") for s in steps])
