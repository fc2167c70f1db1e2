from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from dev_profiles.database import Base
from dev_profiles.models.ids import new_object_id


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(32), primary_key=True, default=new_object_id)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    name = Column(String(200), nullable=True)
    avatar = Column(String(500), nullable=True)
    date = Column(DateTime, server_default=func.now())
