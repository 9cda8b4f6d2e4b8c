from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eduvillage.db.base_class import Base
from eduvillage.models.enums import Role
from eduvillage.models.mixins import TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Role.STUDENT.value, index=True
    )
    avatar: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    bio: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    enrollments = relationship(
        "Enrollment", back_populates="student", cascade="all, delete-orphan"
    )
    completions = relationship(
        "CourseCompletion", back_populates="student", cascade="all, delete-orphan"
    )
    created_courses = relationship(
        "Course", back_populates="instructor", order_by="Course.created_at.desc()"
    )
    enrolled_courses = relationship(
        "Course", secondary="enrollments", viewonly=True, order_by="Course.id"
    )
    completed_courses = relationship(
        "Course", secondary="course_completions", viewonly=True, order_by="Course.id"
    )

    @property
    def enrolled_course_ids(self) -> list[int]:
        return [c.id for c in self.enrolled_courses]

    @property
    def created_course_ids(self) -> list[int]:
        return [c.id for c in self.created_courses]

    @property
    def completed_course_ids(self) -> list[int]:
        return [c.id for c in self.completed_courses]
