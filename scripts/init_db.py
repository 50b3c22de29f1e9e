#!/usr/bin/env python
# scripts/init_db.py

import asyncio
import os
import subprocess
from pathlib import Path

from taskflow.persistence.database import create_all

async def init_db():
    """初始化数据库：优先应用 Alembic 迁移, 失败时直接建表"""
    print("初始化数据库...")

    project_root = Path(__file__).parent.parent
    os.chdir(project_root)  # 确保在项目根目录运行

    alembic_ini = project_root / "alembic.ini"
    if alembic_ini.exists():
        try:
            print("应用 Alembic 迁移...")
            subprocess.run(["alembic", "upgrade", "head"], check=True)
            print("迁移完成！")
            return
        except (OSError, subprocess.CalledProcessError) as e:
            print(f"Alembic 迁移失败: {e}")

    print("使用 SQLAlchemy 创建表...")
    await create_all()
    print("表创建完成！")

if __name__ == "__main__":
    asyncio.run(init_db())
