from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from dev_profiles.database import Base
from dev_profiles.models.ids import new_object_id


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(32), primary_key=True, default=new_object_id)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, unique=True, index=True)
    company = Column(String(200), nullable=True)
    website = Column(String(500), nullable=True)
    location = Column(String(200), nullable=True)
    status = Column(String(200), nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    bio = Column(Text, nullable=True)
    githubusername = Column(String(100), nullable=True)
    social = Column(JSON, nullable=False, default=dict)
    # Embedded documents, newest first. Reassign the list to persist changes.
    experiences = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)
    date = Column(DateTime, server_default=func.now())

    user = relationship("User", lazy="joined")
