from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from eduvillage.models.enums import Role


class UserCreate(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    role: Role = Role.STUDENT

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be between 2 and 50 characters")
        return v


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=50)
    email: EmailStr | None = None
    bio: str | None = Field(default=None, max_length=500)
    avatar: str | None = Field(default=None, max_length=500)


class PasswordUpdate(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=72)


class UserSummary(BaseModel):
    id: int
    name: str
    avatar: str = ""

    class Config:
        from_attributes = True


class UserRead(BaseModel):
    id: int
    name: str
    email: EmailStr
    role: Role
    avatar: str = ""
    bio: str = ""
    is_active: bool = True
    enrolled_course_ids: list[int] = []
    created_course_ids: list[int] = []
    completed_course_ids: list[int] = []
    created_at: datetime

    class Config:
        from_attributes = True
