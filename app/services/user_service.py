# app/services/user_service.py
"""User accounts and login. Passwords are only ever stored as bcrypt hashes."""

from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.models.enums import Role
from app.models.user import User
from app.security import hash_password, verify_password
from app.services.errors import ConflictError, NotFoundError, PermissionDeniedError
from app.utils.logger import get_logger

logger = get_logger(__name__)


def list_users(db: Session):
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def create_user(db: Session, username: str, password: str, role: Role) -> User:
    username = username.strip()
    if db.query(User).filter(User.username == username).first():
        raise ConflictError(f"Username '{username}' already exists.", field="username")
    user = User(username=username, password_hash=hash_password(password), role=role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"Username '{username}' already exists.", field="username") from e
    db.refresh(user)
    logger.info(f"[USERS] Created {username} ({role.value})")
    return user


def update_user(db: Session, user_id: int, role: Role, password: Optional[str] = None) -> User:
    user = get_user(db, user_id)
    user.role = role
    if password and password.strip():
        user.password_hash = hash_password(password)
    db.commit()
    db.refresh(user)
    logger.info(f"[USERS] Updated {user.username} → {role.value}")
    return user


def delete_user(db: Session, user_id: int, current_user_id: int):
    if user_id == current_user_id:
        raise PermissionDeniedError("Forbidden: You cannot delete your own account.")
    user = get_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info(f"[USERS] Deleted {user.username}")


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    """Returns the user on a correct password, None otherwise."""
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"[AUTH] Failed login for '{username}'")
        return None
    return user
