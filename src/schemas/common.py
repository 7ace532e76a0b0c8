"""Response envelope schemas shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope: a human-readable message and an optional payload."""

    message: str
    data: DataT | None = None


class ErrorResponse(BaseModel):
    """Error envelope: a stable error kind and a human-readable message."""

    error: str
    message: str


def error_responses(*status_codes: int) -> dict[int | str, dict]:
    """OpenAPI ``responses`` entries documenting the error envelope."""
    return {code: {"model": ErrorResponse} for code in status_codes}
