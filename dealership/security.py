import logging
import base64
import jwt
from datetime import timedelta
from typing import Optional, Dict, Any
from passlib.context import CryptContext

from dealership.utils import utcnow

logger = logging.getLogger(__name__)

# Setup Password Hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

# --- Encoding Helpers ---

def str_encode(string: str) -> str:
    return base64.b85encode(string.encode('ascii')).decode('ascii')

def str_decode(string: str) -> str:
    return base64.b85decode(string.encode('ascii')).decode('ascii')

# --- JWT Low-Level Logic ---

def generate_token(payload: dict, secret: str, algo: str, expiry: timedelta) -> str:
    """Generic function to encode a JWT."""
    expire = utcnow() + expiry
    to_encode = payload.copy()
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret, algorithm=algo)

def get_token_payload(token: str, secret: str, algo: str) -> Optional[Dict[str, Any]]:
    """Generic function to decode a JWT."""
    try:
        return jwt.decode(token, secret, algorithms=[algo])
    except jwt.ExpiredSignatureError:
        logger.warning("Token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid Token: {e}")
        return None
