import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import admin, auth, health, me, notifications, permits
from .models.user import Base
from .db import engine, SessionLocal
from .core.config import settings as app_config
from .core.errors import register_exception_handlers
from .core.seed import seed_users
from .core.settings import settings

import izin_api.models.permit  # noqa: F401
import izin_api.models.notification_log  # noqa: F401

logging.basicConfig(
    level=app_config.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Izin Kendaraan API")


@app.on_event("startup")
def on_startup():
    if settings.AUTO_DB_BOOTSTRAP:
        # Create tables in dev if missing; production runs alembic.
        Base.metadata.create_all(bind=engine)
        if settings.SEED_USERS:
            with SessionLocal() as session:
                seed_users(session)
        logger.info("database bootstrap done")


register_exception_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(me.router)
app.include_router(permits.router)
app.include_router(admin.router)
app.include_router(notifications.router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
