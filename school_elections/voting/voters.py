# school_elections/voting/voters.py
"""Voter identity checks and the ballot each voter is shown."""

from school_elections import db
from school_elections.database.models import Candidate, Voter
from school_elections.errors import InvalidPin, VoterBlocked, VoterNotFound


def load_voter(dni, otp) -> Voter:
    voter = db.session.get(Voter, dni)
    if voter is None:
        raise VoterNotFound()
    if voter.is_blocked:
        raise VoterBlocked()
    if str(otp) != str(voter.otp):
        raise InvalidPin()
    return voter


def _candidates(race, course=None):
    query = db.session.query(Candidate).filter_by(race=race)
    if course is not None:
        query = query.filter_by(course=course)
    return [c.to_dict() for c in query.order_by(Candidate.name).all()]


def races_for(voter: Voter) -> dict:
    return {
        'rep': {
            'title': f'Representante ({voter.course})',
            'candidates': _candidates('rep', voter.course),
        },
        'amb': {
            'title': f'Líder Ambiental ({voter.course})',
            'candidates': _candidates('amb', voter.course),
        },
        'per': {
            'title': 'Personería (Colegio)',
            'candidates': _candidates('per'),
        },
    }


def verify_voter(dni, otp) -> tuple[Voter, dict]:
    """Check identity and PIN; return the voter and the races open to them.

    Races already voted are still listed; the has-voted flags in the voter
    profile tell the station which ones to grey out.
    """
    voter = load_voter(dni, otp)
    return voter, races_for(voter)
