from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from eduvillage.models.enums import CourseCategory, CourseLevel, CourseStatus
from eduvillage.schemas.common import Pagination
from eduvillage.schemas.user import UserSummary


def _clean_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    return [t.strip() for t in tags if t and t.strip()]


class CourseCreate(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=2000)
    category: CourseCategory
    level: CourseLevel = CourseLevel.BEGINNER
    thumbnail: str = ""
    price: float = Field(default=0, ge=0)
    duration: float = Field(default=0, ge=0)
    tags: list[str] = []

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v):
        return _clean_tags(v)


class CourseUpdate(BaseModel):
    """Every field optional; instructor and roster fields are not editable."""

    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1, max_length=2000)
    category: CourseCategory | None = None
    level: CourseLevel | None = None
    status: CourseStatus | None = None
    thumbnail: str | None = None
    price: float | None = Field(default=None, ge=0)
    duration: float | None = Field(default=None, ge=0)
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v):
        return _clean_tags(v)


class CourseRead(BaseModel):
    id: int
    title: str
    description: str
    instructor_id: int
    instructor: UserSummary | None = None
    category: CourseCategory
    level: CourseLevel
    status: CourseStatus
    thumbnail: str
    price: float
    duration: float
    tags: list[str]
    rating: float
    total_ratings: int
    average_rating: float
    total_students: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CourseDetail(CourseRead):
    enrolled_students: list[UserSummary] = []


class CourseListResponse(BaseModel):
    success: bool = True
    count: int
    pagination: Pagination
    data: list[CourseRead]


class CategoryOption(BaseModel):
    value: CourseCategory
    label: str
