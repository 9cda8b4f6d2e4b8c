from sqlalchemy import JSON, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eduvillage.db.base_class import Base
from eduvillage.models.enums import CourseLevel, CourseStatus
from eduvillage.models.mixins import TimestampMixin


class Course(TimestampMixin, Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    instructor_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    level: Mapped[str] = mapped_column(
        String(20), nullable=False, default=CourseLevel.BEGINNER.value
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=CourseStatus.DRAFT.value, index=True
    )
    thumbnail: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    total_ratings: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # written only by the roster manager, inside the roster transaction
    total_students: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    instructor = relationship("User", back_populates="created_courses")

    enrollments = relationship(
        "Enrollment",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    completions = relationship(
        "CourseCompletion",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    lectures = relationship(
        "Lecture",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    enrolled_students = relationship(
        "User", secondary="enrollments", viewonly=True, order_by="User.id"
    )

    @property
    def is_published(self) -> bool:
        return self.status == CourseStatus.PUBLISHED.value

    @property
    def average_rating(self) -> float:
        if not self.total_ratings:
            return 0.0
        return round(self.rating / self.total_ratings, 1)
