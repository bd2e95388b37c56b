# app/routers/auth.py
"""Login and current-user endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.user import LoginRequest, TokenOut, UserOut
from app.security import TokenData, create_access_token, get_current_user
from app.services import user_service

router = APIRouter()


@router.post("/login", response_model=TokenOut, summary="Exchange username/password for a bearer token")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user = user_service.authenticate(db, body.username, body.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = create_access_token(user.id, user.username, user.role)
    return {"token": token, "user": user}


@router.get("/me", response_model=UserOut, summary="Current user")
def me(current_user: TokenData = Depends(get_current_user), db: Session = Depends(get_db)):
    return user_service.get_user(db, current_user.user_id)
