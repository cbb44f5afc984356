from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, BeforeValidator

T = TypeVar("T")


def _empty_as_none(value: Any) -> Any:
    return None if value == "" else value


# Query filter where `?name=` means the filter is not applied
OptionalIntFilter = Annotated[int | None, BeforeValidator(_empty_as_none)]


class ListResponse(BaseModel, Generic[T]):
    success: bool = True
    count: int
    data: list[T]


class ItemResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class WriteResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: T


class DeleteResponse(BaseModel):
    success: bool = True
    message: str
    deleted_id: int


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Any | None = None
