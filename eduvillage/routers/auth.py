import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eduvillage.core.current_user import get_current_user
from eduvillage.core.deps import get_db
from eduvillage.core.errors import DuplicateEmailError, UnauthenticatedError
from eduvillage.core.security import create_access_token, hash_password, verify_password
from eduvillage.models.user import User
from eduvillage.schemas.auth import AuthResponse, LoginRequest
from eduvillage.schemas.common import DataResponse
from eduvillage.schemas.user import PasswordUpdate, UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_response(user: User) -> dict:
    token = create_access_token(data={"sub": str(user.id)})
    return {"success": True, "token": token, "token_type": "bearer", "user": user}


def _email_taken(db: Session, email: str, exclude_id: int | None = None) -> bool:
    q = db.query(User.id).filter(User.email == email)
    if exclude_id is not None:
        q = q.filter(User.id != exclude_id)
    return q.first() is not None


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Email already registered"},
    },
)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    email = payload.email.lower()
    if _email_taken(db, email):
        raise DuplicateEmailError()

    user = User(
        name=payload.name,
        email=email,
        hashed_password=hash_password(payload.password),
        role=payload.role.value,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmailError()
    db.refresh(user)

    logger.info("Registered user %s as %s", user.id, user.role)
    return _token_response(user)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        401: {"description": "Invalid credentials or deactivated account"},
    },
)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email.lower()).first()
    if not user or not verify_password(payload.password, user.hashed_password):
        raise UnauthenticatedError("Invalid credentials")

    if not user.is_active:
        raise UnauthenticatedError("Account is deactivated")

    return _token_response(user)


@router.get("/me", response_model=DataResponse[UserRead])
def me(current_user: User = Depends(get_current_user)):
    return {"success": True, "data": current_user}


@router.put("/updatedetails", response_model=DataResponse[UserRead])
def update_details(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes:
        changes["email"] = changes["email"].lower()
        if _email_taken(db, changes["email"], exclude_id=current_user.id):
            raise DuplicateEmailError()
    if "name" in changes:
        changes["name"] = changes["name"].strip()

    for field, value in changes.items():
        setattr(current_user, field, value)
    db.commit()
    db.refresh(current_user)
    return {"success": True, "data": current_user}


@router.put("/updatepassword", response_model=AuthResponse)
def update_password(
    payload: PasswordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not verify_password(payload.current_password, current_user.hashed_password):
        raise UnauthenticatedError("Password is incorrect")

    current_user.hashed_password = hash_password(payload.new_password)
    db.commit()
    db.refresh(current_user)
    logger.info("User %s changed password", current_user.id)
    return _token_response(current_user)


@router.get("/logout")
def logout():
    # tokens are stateless; the client just drops its copy
    return {"success": True, "data": {}}
