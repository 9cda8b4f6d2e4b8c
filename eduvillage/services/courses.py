import logging
import math
from dataclasses import dataclass

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, selectinload

from eduvillage.core.errors import NotFoundError
from eduvillage.core.policy import Actor
from eduvillage.models.course import Course
from eduvillage.models.enrollment import Enrollment
from eduvillage.models.enums import CourseSort, CourseStatus
from eduvillage.models.user import User

logger = logging.getLogger(__name__)

# "all" is what the course browser sends for an unset dropdown
ANY = "all"


@dataclass
class CourseFilters:
    category: str | None = None
    level: str | None = None
    instructor_id: int | None = None
    search: str | None = None


def _sort_order(sort: CourseSort):
    """
    Listing sort keys; id breaks ties so pages never overlap.
    """
    if sort is CourseSort.OLDEST:
        return (Course.created_at.asc(), Course.id.asc())
    if sort is CourseSort.POPULAR:
        return (Course.total_students.desc(), Course.id.desc())
    if sort is CourseSort.RATING:
        return (Course.rating.desc(), Course.id.desc())
    return (Course.created_at.desc(), Course.id.desc())


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def published_query(db: Session, filters: CourseFilters) -> Query:
    q = db.query(Course).filter(Course.status == CourseStatus.PUBLISHED.value)

    if filters.category and filters.category != ANY:
        q = q.filter(Course.category == filters.category)
    if filters.level and filters.level != ANY:
        q = q.filter(Course.level == filters.level)
    if filters.instructor_id is not None:
        q = q.filter(Course.instructor_id == filters.instructor_id)
    if filters.search and filters.search.strip():
        pattern = f"%{_escape_like(filters.search.strip())}%"
        q = q.filter(
            or_(
                Course.title.ilike(pattern, escape="\\"),
                Course.description.ilike(pattern, escape="\\"),
            )
        )
    return q


def list_published(
    db: Session,
    filters: CourseFilters,
    sort: CourseSort,
    page: int,
    limit: int,
) -> tuple[list[Course], int]:
    q = published_query(db, filters)
    total = q.count()
    items = (
        q.options(selectinload(Course.instructor))
        .order_by(*_sort_order(sort))
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return items, total


def build_pagination(page: int, limit: int, total: int) -> dict:
    return {
        "current_page": page,
        "total_pages": math.ceil(total / limit) if limit else 0,
        "total_courses": total,
        "has_next": page * limit < total,
        "has_prev": page > 1,
    }


def get_course(db: Session, course_id: int) -> Course:
    course = db.get(Course, course_id)
    if not course:
        raise NotFoundError("Course not found")
    return course


def list_by_instructor(db: Session, instructor_id: int, actor: Actor | None) -> list[Course]:
    """Owner-scoped listing: drafts only for the instructor themselves or an admin."""
    q = db.query(Course).filter(Course.instructor_id == instructor_id)
    sees_drafts = actor is not None and (actor.is_admin or actor.id == instructor_id)
    if not sees_drafts:
        q = q.filter(Course.status == CourseStatus.PUBLISHED.value)
    return q.order_by(Course.created_at.desc(), Course.id.desc()).all()


def list_enrolled(db: Session, student_id: int) -> list[Course]:
    return (
        db.query(Course)
        .join(Enrollment, Enrollment.course_id == Course.id)
        .filter(Enrollment.student_id == student_id)
        .order_by(Enrollment.created_at.desc())
        .all()
    )


def create_course(db: Session, instructor: User, data: dict) -> Course:
    course = Course(
        **data,
        instructor_id=instructor.id,
        status=CourseStatus.DRAFT.value,
        total_students=0,
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    logger.info("Instructor %s created course %s", instructor.id, course.id)
    return course


def update_course(db: Session, course: Course, changes: dict) -> Course:
    previous_status = course.status
    for field, value in changes.items():
        setattr(course, field, value)
    db.commit()
    db.refresh(course)

    if course.status != previous_status:
        logger.info(
            "Course %s status %s -> %s", course.id, previous_status, course.status
        )
    return course


def set_status(db: Session, course: Course, status: CourseStatus) -> Course:
    return update_course(db, course, {"status": status.value})


def delete_course(db: Session, course: Course) -> None:
    """
    Remove a course together with its roster, completions and lectures.

    The instructor's created list is derived from ``Course.instructor_id``
    and every student's enrolled list from the roster rows, so both drop
    the course in the same commit.
    """
    course_id = course.id
    enrolled = course.total_students
    db.delete(course)
    db.commit()
    logger.info("Course %s deleted (%s enrollments removed)", course_id, enrolled)
