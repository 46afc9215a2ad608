"""Feedback database models."""

from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text

from api.db.database import Base


class Feedback(Base):
    """A piece of user feedback. ``id`` doubles as the vector index key."""

    __tablename__ = "feedback"

    id = Column(String(64), primary_key=True)
    source = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)

    # Assigned by the external analysis step
    sentiment = Column(String(20), nullable=True, index=True)  # positive, neutral, negative
    category = Column(String(50), nullable=True, index=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    analyzed_at = Column(DateTime, nullable=True)
