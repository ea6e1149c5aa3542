# Auth / Users

from datetime import datetime
from pydantic import BaseModel

class UserOut(BaseModel):
    id: int
    username: str
    created_at: datetime
    class Config: from_attributes = True

class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserOut
