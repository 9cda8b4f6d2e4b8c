from fastapi import Depends

from eduvillage.core.current_user import get_current_user, get_optional_user
from eduvillage.core.policy import Actor, can_create_course, can_enroll, enforce
from eduvillage.models.user import User


def get_actor(current_user: User = Depends(get_current_user)) -> Actor:
    return Actor.from_user(current_user)


def get_optional_actor(user: User | None = Depends(get_optional_user)) -> Actor | None:
    return Actor.from_user(user)


def require_instructor(current_user: User = Depends(get_current_user)) -> User:
    enforce(
        can_create_course(Actor.from_user(current_user)),
        forbidden=f"User role {current_user.role} is not authorized to access this route",
    )
    return current_user


def require_student(current_user: User = Depends(get_current_user)) -> User:
    enforce(
        can_enroll(Actor.from_user(current_user)),
        forbidden="Only students can enroll in courses",
    )
    return current_user
