# app/main.py
from __future__ import annotations

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import register_error_handlers
from app.logging_config import configure_logging
from app.routes.auth import router as auth_router
from app.routes.generate import router as generate_router
from app.routes.history import router as history_router
from app.routes.templates import router as templates_router

configure_logging()

app = FastAPI(title="Content Generation Server", version="0.1.0")

register_error_handlers(app)

app.include_router(auth_router)
app.include_router(generate_router)
app.include_router(history_router)
app.include_router(templates_router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)) -> dict:
    result = db.execute(text("SELECT 1")).scalar_one()
    return {"db": "ok", "select_1": result}
