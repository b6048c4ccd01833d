from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..models import Base


class Rating(Base):
    """
    Cached aggregate of a game's approved reviews.
    Only ever written by utils.rating.recompute_rating.
    """
    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    game_id = Column(Integer, ForeignKey("games.id", ondelete="CASCADE"), nullable=False, unique=True)
    average_rating = Column(Float, nullable=False)
    total_ratings = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    game = relationship("Game", back_populates="rating")

    def __repr__(self):
        return f"<Rating(game_id={self.game_id}, average={self.average_rating}, total={self.total_ratings})>"
