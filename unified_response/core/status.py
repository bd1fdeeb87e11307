from __future__ import annotations

from enum import Enum

from unified_response.core.config import ResponseSettings

CODE_SEPARATOR = "|"


class Category(str, Enum):
    SUCCESS = "success"
    FAIL = "fail"
    ERROR = "error"


def classify(status: int) -> Category:
    if 400 <= status <= 499:
        return Category.FAIL
    if 500 <= status <= 599:
        return Category.ERROR
    return Category.SUCCESS


def default_message(category: Category, settings: ResponseSettings) -> str:
    return getattr(settings.code, category.value)


def split_business_code(message: str) -> tuple[str, str | None]:
    """Split ``"Message|Code"`` on the first separator only."""
    if CODE_SEPARATOR not in message:
        return message, None
    text, business_code = message.split(CODE_SEPARATOR, 1)
    return text, business_code


def resolve_message(message: str, category: Category, settings: ResponseSettings) -> tuple[str, str | None]:
    if not message:
        message = default_message(category, settings)
    return split_business_code(message or "")
