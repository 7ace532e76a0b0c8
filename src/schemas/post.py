"""Post schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _not_blank(value: str | None, field: str) -> str | None:
    if value is not None and not value.strip():
        raise ValueError(f"Post {field} cannot be empty")
    return value


class PostCreate(BaseModel):
    """Create a new post."""

    title: str = Field(..., max_length=255)
    body: str

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return _not_blank(value, "title")

    @field_validator("body")
    @classmethod
    def validate_body(cls, value: str) -> str:
        return _not_blank(value, "body")


class PostUpdate(BaseModel):
    """Update a post. Absent and null fields are both left unchanged."""

    title: str | None = Field(None, max_length=255)
    body: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        return _not_blank(value, "title")

    @field_validator("body")
    @classmethod
    def validate_body(cls, value: str | None) -> str | None:
        return _not_blank(value, "body")

    def changes(self) -> dict[str, str]:
        """Fields that should actually be written."""
        return self.model_dump(exclude_none=True)


class AuthorResponse(BaseModel):
    """Public author summary embedded in posts."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class PostResponse(BaseModel):
    """Post response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    body: str
    owner_id: UUID
    author: AuthorResponse = Field(validation_alias=AliasChoices("owner", "author"))
    created_at: datetime
    updated_at: datetime
