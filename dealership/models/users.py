# User accounts

from sqlalchemy import Column, DateTime, Integer, String
from dealership.database import Base
from dealership.utils import utcnow

class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    username = Column(String(150), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
