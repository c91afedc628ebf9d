# school_elections/operations/health_monitor.py
# Liveness check for the election store

from typing import Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from school_elections import db


def _check_db() -> Dict:
    try:
        db.session.execute(text("SELECT 1"))
        return {"ok": True, "detail": f"{db.engine.dialect.name} ok"}
    except SQLAlchemyError as e:
        db.session.rollback()
        return {"ok": False, "error": str(e.__class__.__name__)}


def check_health() -> Dict:
    """Aggregate overall service health."""
    database = _check_db()
    return {"ok": database["ok"], "db": database}
