#!/usr/bin/env python
# scripts/reset_db.py

import asyncio

from taskflow.persistence.database import create_all, drop_all

async def reset_db():
    """重置数据库：删除所有模板相关表并重新创建"""
    print("删除现有表...")
    await drop_all()

    print("使用 SQLAlchemy 创建表...")
    await create_all()
    print("数据库重置完成！")

if __name__ == "__main__":
    asyncio.run(reset_db())
