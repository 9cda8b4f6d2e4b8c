import logging
from collections import Counter

from sqlalchemy.orm import Query, Session, selectinload

from eduvillage.core.errors import NotFoundError, ValidationError
from eduvillage.models.course import Course
from eduvillage.models.lecture import Lecture

logger = logging.getLogger(__name__)


def _display_order(q: Query) -> Query:
    return q.order_by(Lecture.order.asc(), Lecture.created_at.asc(), Lecture.id.asc())


def list_for_course(db: Session, course_id: int) -> list[Lecture]:
    q = (
        db.query(Lecture)
        .options(selectinload(Lecture.instructor))
        .filter(Lecture.course_id == course_id)
    )
    return _display_order(q).all()


def list_for_instructor(db: Session, instructor_id: int) -> list[Lecture]:
    return (
        db.query(Lecture)
        .filter(Lecture.instructor_id == instructor_id)
        .order_by(Lecture.created_at.desc(), Lecture.id.desc())
        .all()
    )


def get_lecture(db: Session, lecture_id: int) -> Lecture:
    lecture = db.get(Lecture, lecture_id)
    if not lecture:
        raise NotFoundError("Lecture not found")
    return lecture


def create_lecture(db: Session, course: Course, data: dict) -> Lecture:
    # ownership always mirrors the course, even when an admin creates it
    lecture = Lecture(
        **data,
        course_id=course.id,
        instructor_id=course.instructor_id,
    )
    db.add(lecture)
    db.commit()
    db.refresh(lecture)
    logger.info("Lecture %s added to course %s", lecture.id, course.id)
    return lecture


def update_lecture(db: Session, lecture: Lecture, changes: dict) -> Lecture:
    for field, value in changes.items():
        setattr(lecture, field, value)
    db.commit()
    db.refresh(lecture)
    return lecture


def delete_lecture(db: Session, lecture: Lecture) -> None:
    lecture_id, course_id = lecture.id, lecture.course_id
    db.delete(lecture)
    db.commit()
    logger.info("Lecture %s removed from course %s", lecture_id, course_id)


def reorder(db: Session, course: Course, pairs: list[tuple[int, int]]) -> list[Lecture]:
    """
    Apply ``(lecture_id, order)`` pairs to one course's lectures.

    All-or-nothing: if any pair names a lecture outside this course (or a
    lecture listed twice) the batch is rejected before anything is written.
    """
    ids = [lecture_id for lecture_id, _ in pairs]

    duplicates = sorted(i for i, n in Counter(ids).items() if n > 1)
    if duplicates:
        raise ValidationError(
            "Each lecture may appear only once in a reorder request",
            errors=[{"field": "lecture_orders", "message": f"Duplicate lecture {i}"} for i in duplicates],
        )

    found = {l.id: l for l in db.query(Lecture).filter(Lecture.id.in_(ids)).all()}

    foreign = [
        lecture_id
        for lecture_id in ids
        if lecture_id not in found
        or found[lecture_id].course_id != course.id
        or found[lecture_id].instructor_id != course.instructor_id
    ]
    if foreign:
        raise ValidationError(
            "All lectures must belong to this course",
            errors=[
                {"field": "lecture_orders", "message": f"Lecture {i} does not belong to this course"}
                for i in foreign
            ],
        )

    for lecture_id, order in pairs:
        found[lecture_id].order = order
    db.commit()

    logger.info("Reordered %s lectures in course %s", len(pairs), course.id)
    return list_for_course(db, course.id)
