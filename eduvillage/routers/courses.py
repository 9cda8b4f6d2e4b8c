from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from eduvillage.core.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from eduvillage.core.current_user import get_current_user
from eduvillage.core.deps import get_db
from eduvillage.core.permissions import (
    get_actor,
    get_optional_actor,
    require_instructor,
    require_student,
)
from eduvillage.core.policy import Actor, can_modify_course, can_view_course, enforce
from eduvillage.models.enums import CourseCategory, CourseSort, CourseStatus
from eduvillage.models.user import User
from eduvillage.schemas.common import DataResponse, ListResponse, MessageResponse
from eduvillage.schemas.course import (
    CategoryOption,
    CourseCreate,
    CourseDetail,
    CourseListResponse,
    CourseRead,
    CourseUpdate,
)
from eduvillage.services import courses as course_service
from eduvillage.services import enrollment as roster

router = APIRouter()


def _get_modifiable_course(db: Session, course_id: int, actor: Actor, action: str):
    course = course_service.get_course(db, course_id)
    enforce(
        can_modify_course(actor, course),
        forbidden=f"Not authorized to {action} this course",
    )
    return course


def _get_roster_course(db: Session, course_id: int, me: User):
    course = course_service.get_course(db, course_id)
    if not roster.is_enrolled(db, course.id, me.id):
        # a draft the caller cannot see is missing, not "not enrolled"
        enforce(
            can_view_course(Actor.from_user(me), course),
            not_found="Course not found",
        )
    return course


@router.get("/categories", response_model=DataResponse[list[CategoryOption]])
def list_categories():
    return {
        "success": True,
        "data": [{"value": c, "label": c.label} for c in CourseCategory],
    }


@router.get("", response_model=CourseListResponse)
def list_courses(
    category: str | None = None,
    level: str | None = None,
    instructor: int | None = None,
    search: str | None = None,
    sort: CourseSort = CourseSort.NEWEST,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    filters = course_service.CourseFilters(
        category=category,
        level=level,
        instructor_id=instructor,
        search=search,
    )
    items, total = course_service.list_published(db, filters, sort, page, limit)
    return {
        "success": True,
        "count": len(items),
        "pagination": course_service.build_pagination(page, limit, total),
        "data": items,
    }


@router.get("/user/enrolled", response_model=ListResponse[CourseRead])
def my_enrolled_courses(
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    courses = course_service.list_enrolled(db, me.id)
    return {"success": True, "count": len(courses), "data": courses}


@router.get("/instructor/{instructor_id}", response_model=ListResponse[CourseRead])
def courses_by_instructor(
    instructor_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    courses = course_service.list_by_instructor(db, instructor_id, actor)
    return {"success": True, "count": len(courses), "data": courses}


@router.get("/{course_id}", response_model=DataResponse[CourseDetail])
def get_course(
    course_id: int,
    db: Session = Depends(get_db),
    actor: Actor | None = Depends(get_optional_actor),
):
    course = course_service.get_course(db, course_id)
    enforce(can_view_course(actor, course), not_found="Course not found")
    return {"success": True, "data": course}


@router.post(
    "",
    response_model=DataResponse[CourseRead],
    status_code=status.HTTP_201_CREATED,
)
def create_course(
    payload: CourseCreate,
    db: Session = Depends(get_db),
    instructor: User = Depends(require_instructor),
):
    course = course_service.create_course(db, instructor, payload.model_dump(mode="json"))
    return {"success": True, "data": course}


@router.put("/{course_id}", response_model=DataResponse[CourseRead])
def update_course(
    course_id: int,
    payload: CourseUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    course = _get_modifiable_course(db, course_id, actor, "update")
    changes = payload.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    course = course_service.update_course(db, course, changes)
    return {"success": True, "data": course}


@router.post("/{course_id}/publish", response_model=DataResponse[CourseRead])
def publish_course(
    course_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    course = _get_modifiable_course(db, course_id, actor, "publish")
    course = course_service.set_status(db, course, CourseStatus.PUBLISHED)
    return {"success": True, "data": course}


@router.post("/{course_id}/unpublish", response_model=DataResponse[CourseRead])
def unpublish_course(
    course_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    course = _get_modifiable_course(db, course_id, actor, "unpublish")
    course = course_service.set_status(db, course, CourseStatus.DRAFT)
    return {"success": True, "data": course}


@router.delete("/{course_id}", response_model=MessageResponse)
def delete_course(
    course_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    course = _get_modifiable_course(db, course_id, actor, "delete")
    course_service.delete_course(db, course)
    return {"success": True, "message": "Course deleted successfully"}


@router.post("/{course_id}/enroll", response_model=MessageResponse)
def enroll(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(require_student),
):
    course = course_service.get_course(db, course_id)
    roster.enroll(db, course, me)
    return {"success": True, "message": "Successfully enrolled in course"}


@router.delete("/{course_id}/enroll", response_model=MessageResponse)
def unenroll(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    course = _get_roster_course(db, course_id, me)
    roster.unenroll(db, course, me)
    return {"success": True, "message": "Successfully unenrolled from course"}


@router.post("/{course_id}/complete", response_model=MessageResponse)
def complete(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(require_student),
):
    course = _get_roster_course(db, course_id, me)
    roster.complete(db, course, me)
    return {"success": True, "message": "Course marked as completed"}
