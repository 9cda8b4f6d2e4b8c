"""
Access-control policy for courses, enrollment and lectures.

All checks are pure: they look at an ``Actor`` (or ``None`` for anonymous
callers) and plain resource attributes (``instructor_id``, ``status``) and
return a ``Decision``. Routers call ``enforce`` to turn a denial into the
matching domain error.
"""

from dataclasses import dataclass
from enum import Enum

from eduvillage.core.errors import ForbiddenError, NotFoundError
from eduvillage.models.enums import CourseStatus, Role


class Decision(str, Enum):
    ALLOW = "allow"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Actor:
    id: int
    role: str

    @classmethod
    def from_user(cls, user) -> "Actor | None":
        if user is None:
            return None
        return cls(id=user.id, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def _is_owner(actor: Actor | None, resource) -> bool:
    return actor is not None and resource.instructor_id == actor.id


def _is_owner_or_admin(actor: Actor | None, resource) -> bool:
    return actor is not None and (actor.is_admin or _is_owner(actor, resource))


def can_view_course(actor: Actor | None, course) -> Decision:
    if course.status == CourseStatus.PUBLISHED.value:
        return Decision.ALLOW
    if _is_owner_or_admin(actor, course):
        return Decision.ALLOW
    # drafts are reported as missing so their existence is not leaked
    return Decision.NOT_FOUND


def can_create_course(actor: Actor | None) -> Decision:
    if actor is not None and actor.role == Role.INSTRUCTOR.value:
        return Decision.ALLOW
    return Decision.FORBIDDEN


def can_modify_course(actor: Actor | None, course) -> Decision:
    """Update, delete, publish and unpublish."""
    if _is_owner_or_admin(actor, course):
        return Decision.ALLOW
    return Decision.FORBIDDEN


def can_enroll(actor: Actor | None) -> Decision:
    if actor is not None and actor.role == Role.STUDENT.value:
        return Decision.ALLOW
    return Decision.FORBIDDEN


def can_view_lectures(actor: Actor | None, course, enrolled: bool) -> Decision:
    """
    Lectures inherit course visibility first: a hidden course is NOT_FOUND.
    Past that, only admins, the owning instructor and enrolled students
    get through.
    """
    visibility = can_view_course(actor, course)
    if visibility is not Decision.ALLOW:
        return visibility
    if actor is None:
        return Decision.FORBIDDEN
    if _is_owner_or_admin(actor, course):
        return Decision.ALLOW
    if actor.role == Role.STUDENT.value and enrolled:
        return Decision.ALLOW
    return Decision.FORBIDDEN


def can_create_lecture(actor: Actor | None, course) -> Decision:
    if _is_owner_or_admin(actor, course):
        return Decision.ALLOW
    return Decision.FORBIDDEN


def can_list_instructor_lectures(actor: Actor | None, instructor_id: int) -> Decision:
    if actor is not None and (actor.is_admin or actor.id == instructor_id):
        return Decision.ALLOW
    return Decision.FORBIDDEN


def can_modify_lecture(actor: Actor | None, lecture, course) -> Decision:
    if actor is None:
        return Decision.FORBIDDEN
    if actor.is_admin:
        return Decision.ALLOW
    owns_both = (
        lecture.instructor_id == actor.id
        and course.instructor_id == actor.id
        and lecture.course_id == course.id
    )
    return Decision.ALLOW if owns_both else Decision.FORBIDDEN


def enforce(
    decision: Decision,
    forbidden: str | None = None,
    not_found: str | None = None,
) -> None:
    if decision is Decision.ALLOW:
        return
    if decision is Decision.NOT_FOUND:
        raise NotFoundError(not_found)
    raise ForbiddenError(forbidden)
