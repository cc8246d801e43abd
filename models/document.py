"""
Stored JSON document model
"""

from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.sql import func
from database.connection import Base


class Document(Base):
    """One row per collection; `data` holds the whole aggregate array"""

    __tablename__ = "documents"

    collection = Column(String(100), primary_key=True)
    data = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
