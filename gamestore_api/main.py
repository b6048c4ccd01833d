import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from contextlib import asynccontextmanager
from typing import AsyncIterator
from fastapi import FastAPI

from .utils.config import AUTO_CREATE_TABLES, LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
logging.getLogger("passlib.handlers.bcrypt").setLevel(logging.ERROR)

logger = logging.getLogger(__name__)

from .db_init import init_db
from .utils.db_tools import with_db
from .utils.rate_limit import LoginThrottle
from .utils.session import purge_expired_sessions

from .routers.auth import router as auth_router
from .routers.setup import router as setup_router
from .routers.games import router as games_router
from .routers.reviews import router as reviews_router
from .routers.admin_reviews import router as admin_reviews_router
from .routers.ratings import router as ratings_router
from .routers.categories import router as categories_router
from .routers.platforms import router as platforms_router
from .routers.search import router as search_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Startup tasks: create missing tables (when enabled) and drop expired
    admin sessions.
    """
    try:
        if AUTO_CREATE_TABLES:
            init_db()
        with with_db() as db:
            purged = purge_expired_sessions(db)
            if purged:
                logger.info(f"[Startup] Removed {purged} expired admin session(s).")
    except Exception as e:
        logger.warning(f"[Startup] Database initialization failed: {e}")

    yield


app = FastAPI(lifespan=lifespan)
app.state.login_throttle = LoginThrottle()

app.include_router(auth_router)
app.include_router(setup_router)
app.include_router(games_router)
app.include_router(reviews_router)
app.include_router(admin_reviews_router)
app.include_router(ratings_router)
app.include_router(categories_router)
app.include_router(platforms_router)
app.include_router(search_router)


@app.get("/health")
def health():
    return {"ok": True, "service": "GameStore API"}


_version_path = Path(__file__).with_name("version.json")
try:
    with open(_version_path, "r", encoding="utf-8") as f:
        _version_info = json.load(f)
except Exception:
    _version_info = {
        "app_name": "GameStore API",
        "version": "unknown",
        "build_name": "unknown",
        "build_time": 0,
    }


@app.get("/")
def read_root():
    return _version_info
