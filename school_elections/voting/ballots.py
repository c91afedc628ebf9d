# school_elections/voting/ballots.py
"""Vote casting.

One call records every race the voter chose in a single transaction:

* each race flag is flipped with a conditional UPDATE (``... AND
  has_voted_<race> = false``), so of two concurrent casts for the same voter
  and race only one can see a changed row;
* the PIN is rotated with a conditional UPDATE on the old PIN, so the same
  PIN is never accepted twice;
* ballots carry no voter identity, only a keyed audit tag;
* one ledger row summarises the event for the station.

Any failure rolls back the whole cast.
"""

import logging
import secrets
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from school_elections import db
from school_elections.database.models import RACES, Ballot, Candidate, LedgerEntry, Voter
from school_elections.errors import AlreadyVoted, InvalidCandidate, InvalidPin
from school_elections.voting.voters import load_voter

logger = logging.getLogger(__name__)


@dataclass
class CastResult:
    ballot_id: str
    mesa_id: int
    timestamp: datetime
    races: list[str] = field(default_factory=list)
    voter_ref: str = ''


def generate_otp() -> str:
    return str(100000 + secrets.randbelow(900000))


def _check_candidate(race, candidate_id, voter):
    candidate = db.session.get(Candidate, candidate_id)
    if candidate is None or candidate.race != race:
        raise InvalidCandidate(race)
    # rep and amb are per course, per is school wide
    if race != 'per' and candidate.course != voter.course:
        raise InvalidCandidate(race)


def _claim_race(dni, race):
    flag = getattr(Voter, f'has_voted_{race}')
    updated = (
        db.session.query(Voter)
        .filter(Voter.dni == dni, flag.is_(False))
        .update({flag: True}, synchronize_session=False)
    )
    if updated != 1:
        raise AlreadyVoted(race)


def _rotate_otp(dni, old_otp):
    updated = (
        db.session.query(Voter)
        .filter(Voter.dni == dni, Voter.otp == old_otp)
        .update({Voter.otp: generate_otp()}, synchronize_session=False)
    )
    if updated != 1:
        raise InvalidPin()


def cast_vote(mesa_id, dni, otp, selections, tagger) -> CastResult:
    """Record the voter's selections and return the receipt data.

    ``selections`` maps race -> candidate id; missing or empty entries are
    skipped races.
    """
    chosen = [(race, selections.get(race)) for race in RACES if selections.get(race)]

    try:
        voter = load_voter(dni, otp)
        for race, _ in chosen:
            if voter.has_voted(race):
                raise AlreadyVoted(race)
        for race, candidate_id in chosen:
            _check_candidate(race, candidate_id, voter)

        result = CastResult(
            ballot_id=str(uuid.uuid4()),
            mesa_id=mesa_id,
            timestamp=datetime.now(timezone.utc),
            voter_ref=tagger.voter_ref(voter.dni),
        )
        current_otp = voter.otp

        for race, candidate_id in chosen:
            _claim_race(voter.dni, race)
            db.session.add(Ballot(
                ballot_id=result.ballot_id,
                mesa_id=mesa_id,
                race=race,
                candidate_id=candidate_id,
                created_at=result.timestamp,
                audit_hash=tagger.ballot_tag(voter.dni, race, result.timestamp),
            ))
            result.races.append(race)

        _rotate_otp(voter.dni, current_otp)

        db.session.add(LedgerEntry(
            ballot_id=result.ballot_id,
            mesa_id=mesa_id,
            timestamp=result.timestamp,
            races=','.join(result.races),
            audit_hash=tagger.ledger_tag(result.ballot_id, mesa_id),
        ))
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info("Ballot %s cast at mesa %s for races %s",
                result.ballot_id, mesa_id, result.races or '-')
    return result
