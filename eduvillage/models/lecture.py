from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eduvillage.db.base_class import Base
from eduvillage.models.mixins import TimestampMixin


class Lecture(TimestampMixin, Base):
    __tablename__ = "lectures"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    video_url: Mapped[str] = mapped_column(String(2048), nullable=False)

    # both owners are fixed at creation; instructor_id mirrors the course's
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False
    )
    instructor_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )

    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (Index("ix_lectures_course_order", "course_id", "order"),)

    course = relationship("Course", back_populates="lectures")
    instructor = relationship("User")
