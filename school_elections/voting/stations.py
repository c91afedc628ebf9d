# school_elections/voting/stations.py
"""Polling-station login and session-key resolution."""

import uuid
from datetime import datetime, timedelta, timezone

from school_elections import db
from school_elections.database.models import PollingStation, StationSession
from school_elections.errors import InvalidStationCode, StationNotAuthenticated


def login_station(code: str) -> tuple[str, PollingStation]:
    """Issue a new session key for the station owning ``code``."""
    station = db.session.query(PollingStation).filter_by(code=code).first()
    if station is None:
        raise InvalidStationCode()

    key = str(uuid.uuid4())
    db.session.add(StationSession(key=key, mesa_id=station.id,
                                  created_at=datetime.now(timezone.utc)))
    db.session.commit()
    return key, station


def resolve_station(key, ttl_hours=None) -> int:
    """Map a session key to its station id.

    With ``ttl_hours`` set, keys older than that are refused as well.
    """
    if not key:
        raise StationNotAuthenticated()
    session_row = db.session.get(StationSession, key)
    if session_row is None:
        raise StationNotAuthenticated()
    if ttl_hours is not None and _is_expired(session_row.created_at, ttl_hours):
        raise StationNotAuthenticated()
    return session_row.mesa_id


def _is_expired(created_at, ttl_hours):
    if created_at.tzinfo is None:
        # SQLite hands back naive values; they were written as UTC
        created_at = created_at.replace(tzinfo=timezone.utc)
    return datetime.now(timezone.utc) - created_at > timedelta(hours=ttl_hours)
