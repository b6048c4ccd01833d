from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship

from ..models.game_category import game_categories
from ..models.game_platform import game_platforms
from ..models import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Game(Base):
    __tablename__ = "games"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    categories = relationship("Category", secondary=game_categories, back_populates="games")
    platforms = relationship("Platform", secondary=game_platforms, back_populates="games")
    reviews = relationship("Review", back_populates="game", cascade="all, delete-orphan")
    rating = relationship(
        "Rating", back_populates="game", uselist=False, cascade="all, delete-orphan"
    )

    @property
    def average_rating(self):
        return self.rating.average_rating if self.rating else None

    @property
    def total_ratings(self):
        return self.rating.total_ratings if self.rating else None

    def __repr__(self):
        return f"<Game(id={self.id}, title={self.title})>"
