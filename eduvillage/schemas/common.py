from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class ListResponse(BaseModel, Generic[T]):
    success: bool = True
    count: int
    data: list[T]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_courses: int
    has_next: bool
    has_prev: bool
