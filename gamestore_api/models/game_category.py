from sqlalchemy import Table, Column, Integer, ForeignKey
from ..models import Base

game_categories = Table(
    "game_categories",
    Base.metadata,
    Column("game_id", Integer, ForeignKey("games.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True, index=True),
)
