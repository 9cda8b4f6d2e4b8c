from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eduvillage.core.deps import get_db
from eduvillage.core.permissions import get_actor
from eduvillage.core.policy import (
    Actor,
    can_create_lecture,
    can_list_instructor_lectures,
    can_modify_course,
    can_modify_lecture,
    can_view_lectures,
    enforce,
)
from eduvillage.schemas.common import DataResponse, ListResponse, MessageResponse
from eduvillage.schemas.lecture import LectureCreate, LectureRead, LectureReorder, LectureUpdate
from eduvillage.services import courses as course_service
from eduvillage.services import enrollment as roster
from eduvillage.services import lectures as lecture_service

# every route here sits behind get_actor, so anonymous callers get 401
router = APIRouter()

NOT_ENROLLED = "Access denied. You must be enrolled in this course to view lectures."


def _ensure_can_view(db: Session, actor: Actor, course) -> None:
    enrolled = roster.is_enrolled(db, course.id, actor.id)
    enforce(
        can_view_lectures(actor, course, enrolled),
        forbidden=NOT_ENROLLED,
        not_found="Course not found",
    )


def _get_modifiable_lecture(db: Session, lecture_id: int, actor: Actor, action: str):
    lecture = lecture_service.get_lecture(db, lecture_id)
    enforce(
        can_modify_lecture(actor, lecture, lecture.course),
        forbidden=f"Access denied. You can only {action} your own lectures.",
    )
    return lecture


@router.get("/course/{course_id}", response_model=ListResponse[LectureRead])
def list_course_lectures(
    course_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    course = course_service.get_course(db, course_id)
    _ensure_can_view(db, actor, course)
    lectures = lecture_service.list_for_course(db, course.id)
    return {"success": True, "count": len(lectures), "data": lectures}


@router.post(
    "/course/{course_id}",
    response_model=DataResponse[LectureRead],
    status_code=status.HTTP_201_CREATED,
)
def create_lecture(
    course_id: int,
    payload: LectureCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    course = course_service.get_course(db, course_id)
    enforce(
        can_create_lecture(actor, course),
        forbidden="Access denied. You can only add lectures to your own courses.",
    )
    lecture = lecture_service.create_lecture(db, course, payload.model_dump())
    return {"success": True, "data": lecture}


@router.put("/course/{course_id}/order", response_model=ListResponse[LectureRead])
def reorder_lectures(
    course_id: int,
    payload: LectureReorder,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    course = course_service.get_course(db, course_id)
    enforce(
        can_modify_course(actor, course),
        forbidden="Access denied. You can only reorder lectures in your own courses.",
    )
    pairs = [(item.lecture_id, item.order) for item in payload.lecture_orders]
    lectures = lecture_service.reorder(db, course, pairs)
    return {"success": True, "count": len(lectures), "data": lectures}


@router.get("/instructor/{instructor_id}", response_model=ListResponse[LectureRead])
def lectures_by_instructor(
    instructor_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    enforce(
        can_list_instructor_lectures(actor, instructor_id),
        forbidden="Access denied. You can only view your own lectures.",
    )
    lectures = lecture_service.list_for_instructor(db, instructor_id)
    return {"success": True, "count": len(lectures), "data": lectures}


@router.get("/{lecture_id}", response_model=DataResponse[LectureRead])
def get_lecture(
    lecture_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    lecture = lecture_service.get_lecture(db, lecture_id)
    _ensure_can_view(db, actor, lecture.course)
    return {"success": True, "data": lecture}


@router.put("/{lecture_id}", response_model=DataResponse[LectureRead])
def update_lecture(
    lecture_id: int,
    payload: LectureUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    lecture = _get_modifiable_lecture(db, lecture_id, actor, "update")
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    lecture = lecture_service.update_lecture(db, lecture, changes)
    return {"success": True, "data": lecture}


@router.delete("/{lecture_id}", response_model=MessageResponse)
def delete_lecture(
    lecture_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    lecture = _get_modifiable_lecture(db, lecture_id, actor, "delete")
    lecture_service.delete_lecture(db, lecture)
    return {"success": True, "message": "Lecture deleted successfully"}
