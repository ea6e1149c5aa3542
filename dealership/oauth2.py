from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from dealership.database import get_session
from dealership.config import get_settings
from dealership import models
from dealership.security import get_token_payload, str_decode

# This defines where FastAPI looks for the token by default (Authorization: Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_token_user(token: str, db: Session) -> Optional[models.User]:
    """
    Decodes the token and loads the user it was issued to.
    """
    if not token:
        return None

    settings = get_settings()
    payload = get_token_payload(token, settings.JWT_SECRET, settings.JWT_ALGORITHM)
    if not payload or not payload.get('sub'):
        return None

    try:
        user_id = int(str_decode(payload['sub']))
    except ValueError:
        return None

    return db.query(models.User).filter(models.User.id == user_id).first()


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_session)
) -> models.User:
    """
    Dependency for API Routes expecting a Header Token.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user = get_token_user(token, db)
    if not user:
        raise credentials_exception
    return user
