from datetime import datetime

from pydantic import BaseModel, Field

from eduvillage.schemas.user import UserSummary

VIDEO_URL_PATTERN = r"^https?://.+"


class LectureCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    video_url: str = Field(pattern=VIDEO_URL_PATTERN, max_length=2048)
    order: int = Field(default=0, ge=0)


class LectureUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    video_url: str | None = Field(default=None, pattern=VIDEO_URL_PATTERN, max_length=2048)
    order: int | None = Field(default=None, ge=0)


class LectureOrderItem(BaseModel):
    lecture_id: int
    order: int = Field(ge=0)


class LectureReorder(BaseModel):
    lecture_orders: list[LectureOrderItem] = Field(min_length=1)


class LectureRead(BaseModel):
    id: int
    title: str
    video_url: str
    course_id: int
    instructor_id: int
    instructor: UserSummary | None = None
    order: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
