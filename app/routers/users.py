# app/routers/users.py
"""User management — executives only."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.user import UserCreate, UserOut, UserUpdate
from app.security import TokenData, requires
from app.services import permissions, user_service

router = APIRouter()


@router.get("/users", response_model=list[UserOut], summary="List users")
def list_users(_: TokenData = Depends(requires(permissions.USER_MANAGE)),
               db: Session = Depends(get_db)):
    return user_service.list_users(db)


@router.post("/users", response_model=UserOut, status_code=201, summary="Create a user")
def create_user(body: UserCreate,
                _: TokenData = Depends(requires(permissions.USER_MANAGE)),
                db: Session = Depends(get_db)):
    return user_service.create_user(db, body.username, body.password, body.role)


@router.put("/users/{user_id}", response_model=UserOut, summary="Change role and/or password")
def update_user(user_id: int, body: UserUpdate,
                _: TokenData = Depends(requires(permissions.USER_MANAGE)),
                db: Session = Depends(get_db)):
    return user_service.update_user(db, user_id, body.role, body.password)


@router.delete("/users/{user_id}", summary="Delete a user")
def delete_user(user_id: int,
                current_user: TokenData = Depends(requires(permissions.USER_MANAGE)),
                db: Session = Depends(get_db)):
    user_service.delete_user(db, user_id, current_user.user_id)
    return {"status": "deleted", "id": user_id}
