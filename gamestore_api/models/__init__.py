from sqlalchemy.orm import declarative_base

Base = declarative_base()

from .game_category import game_categories
from .game_platform import game_platforms
from .game import Game
from .category import Category
from .platform import Platform
from .review import Review
from .rating import Rating
from .admin import AdminUser
from .admin_session import AdminSession
from .app_config import AppConfig
