from datetime import datetime, UTC

def utcnow() -> datetime:
    """当前 UTC 时间 (naive), 数据库中统一存储 naive UTC."""
    return datetime.now(UTC).replace(tzinfo=None)
