from typing import Optional


def is_blank(value: Optional[str]) -> bool:
    """None, 空串和纯空白都视为空"""
    return value is None or not value.strip()


def is_not_blank(value: Optional[str]) -> bool:
    return not is_blank(value)
