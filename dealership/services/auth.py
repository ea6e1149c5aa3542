import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from dealership import models
from dealership.config import get_settings
from dealership.security import generate_token, hash_password, str_encode, verify_password

logger = logging.getLogger(__name__)


def login(db: Session, username: str, password: str) -> Optional[models.User]:
    """
    Returns the user when the credentials match, ``None`` otherwise.
    """
    user = db.query(models.User).filter(models.User.username == username).first()
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        logger.warning(f"Failed login for {username}")
        return None
    return user


def create_default_user(db: Session) -> models.User:
    """
    Returns the first existing account, or creates the configured admin.
    """
    existing = db.query(models.User).order_by(models.User.id).first()
    if existing:
        return existing

    settings = get_settings()
    user = models.User(
        username=settings.DEFAULT_ADMIN_USERNAME,
        password_hash=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created default user {user.username}")
    return user


def issue_access_token(user: models.User) -> dict:
    settings = get_settings()
    expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": str_encode(str(user.id)),
        "n": str_encode(user.username),
    }
    token = generate_token(payload, settings.JWT_SECRET, settings.JWT_ALGORITHM, expires)
    return {"access_token": token, "token_type": "bearer", "expires_in": int(expires.total_seconds())}
