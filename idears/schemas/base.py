"""Base schema configuration."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode
    )


class CreatedMixin(BaseModel):
    """Mixin for the opaque id and the creation timestamp (ms since epoch)."""

    id: str
    created_at: int


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# Checked on the trimmed value, stored as sent
NonBlankStr = Annotated[str, AfterValidator(_not_blank)]
