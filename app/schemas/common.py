import enum
import math
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar, Union
from typing_extensions import Annotated

from pydantic import BaseModel, BeforeValidator, HttpUrl, PlainSerializer

from app.core.exceptions import ValidationFailed


LOCATION_PREFIXES = {"body", "query", "path", "form", "header"}

E = TypeVar("E", bound=enum.Enum)


class Pagination(BaseModel):
    current: int
    pages: int
    total: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(current=page, pages=math.ceil(total / limit) if limit else 0, total=total)


class ErrorDetail(BaseModel):
    field: str
    message: str


class APIResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: Any | None = None
    pagination: Optional[Pagination] = None


def parse_tags(v: Any) -> Any:
    """Accept a comma separated string or a list and return a clean list."""
    if v is None:
        return []
    if isinstance(v, str):
        return [tag.strip() for tag in v.split(",") if tag.strip()]
    if isinstance(v, (list, tuple)):
        return [str(tag).strip() for tag in v if str(tag).strip()]
    return v


TagList = Annotated[List[str], BeforeValidator(parse_tags)]

# Validated as an http(s) URL but stored and returned as plain text
UrlStr = Annotated[HttpUrl, PlainSerializer(lambda v: str(v), return_type=str)]


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Turn pydantic error dicts into the ordered ``{field, message}`` list."""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in LOCATION_PREFIXES:
            loc = loc[1:]
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        formatted.append({"field": ".".join(loc) or "__root__", "message": message})
    return formatted


def blank_to_none(v: Union[str, Any]) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


def form_fields(items: Iterable[Any]) -> Dict[str, Any]:
    """Plain text parts of a multipart form, blank values dropped to None."""
    return {key: blank_to_none(value) for key, value in items if isinstance(value, str)}


def enum_filter(enum_cls: Type[E], value: Optional[str], field: str) -> Optional[E]:
    """Query filter over an enum where ``all`` (or nothing) means no filter."""
    if value is None or value == "all":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(["all"] + [member.value for member in enum_cls])
        raise ValidationFailed(errors=[{"field": field, "message": f"Must be one of: {allowed}"}])
