from functools import lru_cache
from typing import List

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RETURN_FIELDS = [
    "total",
    "per_page",
    "current_page",
    "last_page",
    "from",
    "to",
    "path",
    "prev_page_url",
    "next_page_url",
]


class CodeMessages(BaseModel):
    """Default ``"Message|BusinessCode"`` strings per outcome."""

    success: str = "Success|10000"
    fail: str = "Fail|20000"
    error: str = "Error|30000"
    unauthorized: str = "Unauthenticated|20001"
    validation: str = "Unprocessable Entity|20002"

    @field_validator("success", "fail", "error", "unauthorized", "validation", mode="before")
    @classmethod
    def normalize_code_message(cls, value: str | None) -> str:
        if value is None:
            return ""
        return str(value).strip()


class PaginationFormat(BaseModel):
    meta_field: str = "meta"
    return_fields: List[str] = list(DEFAULT_RETURN_FIELDS)

    @field_validator("meta_field", mode="before")
    @classmethod
    def validate_meta_field(cls, value: str | None) -> str:
        field = str(value or "").strip()
        if not field:
            raise ValueError("FORMAT__PAGINATION__META_FIELD cannot be empty")
        return field

    @field_validator("return_fields", mode="before")
    @classmethod
    def parse_return_fields(cls, value: List[str] | str | None) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            items = [item.strip() for item in value.split(",")]
        elif isinstance(value, (list, tuple)):
            items = value
        else:
            raise ValueError("Invalid format for FORMAT__PAGINATION__RETURN_FIELDS")
        seen: set[str] = set()
        fields: list[str] = []
        for item in items:
            field = str(item).strip()
            if not field or field in seen:
                continue
            seen.add(field)
            fields.append(field)
        return fields


class FormatSettings(BaseModel):
    collection_field: str = "list"
    pagination: PaginationFormat = PaginationFormat()

    @field_validator("collection_field", mode="before")
    @classmethod
    def validate_collection_field(cls, value: str | None) -> str:
        field = str(value or "").strip()
        if not field:
            raise ValueError("FORMAT__COLLECTION_FIELD cannot be empty")
        return field


class ResponseSettings(BaseSettings):
    is_restful: bool = False
    is_unified_return_json: bool = True
    debug: bool = False
    login_url: str = "/login"
    code: CodeMessages = CodeMessages()
    format: FormatSettings = FormatSettings()
    redact_fields: List[str] = ["authorization", "password", "token", "secret"]
    redaction_placeholder: str = "***"

    model_config = SettingsConfigDict(
        env_prefix="RESPONSE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("login_url", mode="before")
    @classmethod
    def normalize_login_url(cls, value: str | None) -> str:
        url = str(value or "").strip()
        return url or "/login"

    @field_validator("redact_fields", mode="before")
    @classmethod
    def split_redact_fields(cls, value: List[str] | str | None) -> List[str]:
        if value is None:
            return []
        if isinstance(value, list):
            return [item.strip().lower() for item in value if isinstance(item, str) and item.strip()]
        if isinstance(value, str):
            return [item.strip().lower() for item in value.split(",") if item.strip()]
        raise ValueError("Invalid format for REDACT_FIELDS")

    @field_validator("redaction_placeholder", mode="before")
    @classmethod
    def validate_redaction_placeholder(cls, value: str | None) -> str:
        if value is None:
            return "***"
        placeholder = value.strip()
        if not placeholder:
            raise ValueError("REDACTION_PLACEHOLDER cannot be empty")
        return placeholder


@lru_cache(maxsize=1)
def get_settings() -> ResponseSettings:
    return ResponseSettings()
