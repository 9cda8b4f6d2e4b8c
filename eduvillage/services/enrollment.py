"""
Roster manager.

The ``enrollments`` table is both the course roster and each student's
enrolled-course list. ``Course.total_students`` is rewritten from the
roster count in the same transaction as every roster change, so it can
never drift from the number of rows.
"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eduvillage.core.errors import (
    AlreadyCompletedError,
    AlreadyEnrolledError,
    CourseNotPublishedError,
    NotEnrolledError,
)
from eduvillage.models.completion import CourseCompletion
from eduvillage.models.course import Course
from eduvillage.models.enrollment import Enrollment
from eduvillage.models.user import User

logger = logging.getLogger(__name__)


def is_enrolled(db: Session, course_id: int, student_id: int) -> bool:
    return (
        db.query(Enrollment.id)
        .filter(Enrollment.course_id == course_id, Enrollment.student_id == student_id)
        .first()
        is not None
    )


def refresh_total_students(db: Session, course_id: int) -> None:
    """Recompute the stored count from the roster in a single UPDATE."""
    roster_size = (
        db.query(func.count(Enrollment.id))
        .filter(Enrollment.course_id == course_id)
        .scalar_subquery()
    )
    db.query(Course).filter(Course.id == course_id).update(
        {Course.total_students: roster_size}, synchronize_session=False
    )


def enroll(db: Session, course: Course, student: User) -> Course:
    if not course.is_published:
        raise CourseNotPublishedError()
    if is_enrolled(db, course.id, student.id):
        raise AlreadyEnrolledError()

    db.add(Enrollment(student_id=student.id, course_id=course.id))
    try:
        db.flush()
        refresh_total_students(db, course.id)
        db.commit()
    except IntegrityError:
        # a concurrent request inserted the same pair first
        db.rollback()
        raise AlreadyEnrolledError()

    db.refresh(course)
    logger.info(
        "Student %s enrolled in course %s (total=%s)",
        student.id,
        course.id,
        course.total_students,
    )
    return course


def unenroll(db: Session, course: Course, student: User) -> Course:
    deleted = (
        db.query(Enrollment)
        .filter(Enrollment.course_id == course.id, Enrollment.student_id == student.id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise NotEnrolledError()

    refresh_total_students(db, course.id)
    db.commit()

    db.refresh(course)
    logger.info(
        "Student %s unenrolled from course %s (total=%s)",
        student.id,
        course.id,
        course.total_students,
    )
    return course


def complete(db: Session, course: Course, student: User) -> CourseCompletion:
    if not is_enrolled(db, course.id, student.id):
        raise NotEnrolledError()

    completion = CourseCompletion(student_id=student.id, course_id=course.id)
    db.add(completion)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise AlreadyCompletedError()

    db.refresh(completion)
    logger.info("Student %s completed course %s", student.id, course.id)
    return completion
