from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from dev_profiles.database import Base
from dev_profiles.models.ids import new_object_id


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_object_id)
    name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=False, unique=True)
    avatar = Column(String(500), nullable=True)
    date = Column(DateTime, server_default=func.now())
