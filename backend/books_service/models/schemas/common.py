"""Shared request schema building blocks."""

from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
)
from pydantic.alias_generators import to_camel

from books_service.core.identifiers import decode

_url_adapter = TypeAdapter(AnyUrl)


def _check_uri(value: str) -> str:
    # Validate only; keep the caller's exact string
    _url_adapter.validate_python(value)
    return value


# Identifier accepted as a JSON number or a decimal string
WireId = Annotated[int, BeforeValidator(decode), Field(ge=1)]

Uri = Annotated[str, AfterValidator(_check_uri)]

Title = Annotated[str, Field(min_length=3, max_length=255)]
Description = Annotated[str, Field(min_length=10, max_length=1000)]
CommentBody = Annotated[str, Field(min_length=3, max_length=1000)]
GenreName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
ParagraphText = Annotated[str, Field(min_length=10)]


class CamelModel(BaseModel):
    """Request model whose fields are named in camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def format_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into ``{field, message}`` pairs."""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        formatted.append({
            "field": ".".join(loc),
            "message": error.get("msg", "Invalid value"),
        })
    return formatted
