# dealership/routers/auth.py

from fastapi import APIRouter, Depends, status, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from dealership import schemas
from dealership.database import get_db
from dealership.services import auth as auth_service

router = APIRouter(
    prefix="/api/v1/auth",
    tags=['Auth']
)

@router.post("/login", status_code=status.HTTP_200_OK, response_model=schemas.LoginResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Authenticate a user and return a bearer token.
    """
    user = auth_service.login(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect username or password.")

    return {**auth_service.issue_access_token(user), "user": user}

@router.post("/default-user", status_code=status.HTTP_200_OK, response_model=schemas.UserOut)
def create_default_user(db: Session = Depends(get_db)):
    """
    Bootstraps the first admin account; a no-op once any user exists.
    """
    return auth_service.create_default_user(db)
