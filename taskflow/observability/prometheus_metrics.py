"""
Prometheus metric definitions  +  /metrics route (multiprocess-ready)
--------------------------------------------------------------------
• 若设置环境变量  PROMETHEUS_MULTIPROC_DIR=<dir>：
    - 使用 multiprocess Collector 聚合所有进程写入的 .db 文件
• 否则回退为单进程默认注册表
"""

import os

from fastapi import APIRouter, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    generate_latest,
    CollectorRegistry,
    REGISTRY,
    multiprocess,
)

router = APIRouter()

# ────────── Registry 处理 ───────────────────────────────────
if os.getenv("PROMETHEUS_MULTIPROC_DIR"):
    _SCRAPE_REGISTRY: CollectorRegistry = CollectorRegistry()
    multiprocess.MultiProcessCollector(_SCRAPE_REGISTRY)
else:
    _SCRAPE_REGISTRY = REGISTRY
# ───────────────────────────────────────────────────────────

# ────────── Metric definitions ─────────────────────────────
template_created = Counter(
    "task_template_created_total",
    "Task templates created",
)

forms_replaced = Counter(
    "task_template_forms_replaced_total",
    "Form definitions written by form replacement",
)

steps_replaced = Counter(
    "task_template_steps_replaced_total",
    "Step definitions written by step replacement",
)
# ───────────────────────────────────────────────────────────


@router.get("/metrics")
def metrics() -> Response:            # pragma: no cover
    """Prometheus scrape endpoint."""
    return Response(
        generate_latest(_SCRAPE_REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )
