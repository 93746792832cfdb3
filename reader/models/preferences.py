"""Preferences model: one row per user, replaced wholesale on update."""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from reader.db.session import Base

DEFAULT_FONT_SIZE = 16
DEFAULT_THEME_COLOR = "light"


class Preferences(Base):
    __tablename__ = "preferences"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True, autoincrement=False)
    font_size = Column(Integer, nullable=False, default=DEFAULT_FONT_SIZE)
    theme_color = Column(String(32), nullable=False, default=DEFAULT_THEME_COLOR)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="preferences")
