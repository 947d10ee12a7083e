"""FastAPI entrypoint for the meal ordering service."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from bento_orders.api.v1.api import api_router
from bento_orders.core.config import settings
from bento_orders.db import session as db_session
from bento_orders.db.base import Base
from bento_orders.services.account_service import ensure_default_admin

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup() -> None:
    logging.getLogger("bento_orders").setLevel(settings.log_level.upper())
    Base.metadata.create_all(bind=db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            admin_present = ensure_default_admin(session)
            logger.info("[BOOTSTRAP] admin present: %s", "yes" if admin_present else "no")
        except Exception:
            logger.exception("[BOOTSTRAP] Admin bootstrap failed; continuing startup.")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.app_env}
