# school_elections/voting/tally.py
"""Station ledger and admin results. Always read straight from the tables."""

from sqlalchemy import func

from school_elections import db
from school_elections.database.models import (
    RACES, AdminCode, Ballot, Candidate, LedgerEntry, PollingStation,
)
from school_elections.errors import InvalidAdminCode


def station_ledger(mesa_id, limit=100) -> list[dict]:
    rows = (
        db.session.query(LedgerEntry)
        .filter_by(mesa_id=mesa_id)
        .order_by(LedgerEntry.timestamp.desc(), LedgerEntry.id.desc())
        .limit(limit)
        .all()
    )
    return [row.to_dict() for row in rows]


def check_admin_code(code):
    if db.session.get(AdminCode, code) is None:
        raise InvalidAdminCode()


def race_totals(race) -> list[dict]:
    count = func.count(Ballot.id).label('count')
    rows = (
        db.session.query(Ballot.candidate_id, func.coalesce(Candidate.name, 'Blanco'), count)
        .outerjoin(Candidate, Ballot.candidate_id == Candidate.id)
        .filter(Ballot.race == race)
        .group_by(Ballot.candidate_id, Candidate.name)
        .order_by(count.desc(), Ballot.candidate_id)
        .all()
    )
    return [
        {'candidate_id': candidate_id, 'name': name, 'count': int(total)}
        for candidate_id, name, total in rows
    ]


def totals_by_station() -> list[dict]:
    rows = (
        db.session.query(Ballot.mesa_id, PollingStation.name, func.count(Ballot.id))
        .outerjoin(PollingStation, Ballot.mesa_id == PollingStation.id)
        .group_by(Ballot.mesa_id, PollingStation.name)
        .order_by(Ballot.mesa_id)
        .all()
    )
    return [
        {'mesa_id': mesa_id, 'name': name, 'votos': int(total)}
        for mesa_id, name, total in rows
    ]


def results(code) -> dict:
    check_admin_code(code)
    summary = {race: race_totals(race) for race in RACES}
    summary['byMesa'] = totals_by_station()
    return summary
