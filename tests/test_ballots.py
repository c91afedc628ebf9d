import pytest

from school_elections import db
from school_elections.database.models import Ballot, LedgerEntry, Voter
from school_elections.errors import AlreadyVoted, InvalidPin
from school_elections.seed import candidate_id
from school_elections.voting import ballots
from school_elections.voting.ballots import cast_vote, generate_otp

T3A_REP = candidate_id('rep', 'T3A', 'Camila Pardo')


@pytest.fixture
def tagger(app):
    return app.extensions['audit_tagger']


def test_generate_otp_is_six_digits():
    for _ in range(50):
        otp = generate_otp()
        assert len(otp) == 6 and otp.isdigit()
        assert 100000 <= int(otp) <= 999999


def test_cast_vote_writes_ballot_and_ledger(app, tagger):
    with app.app_context():
        otp = db.session.get(Voter, '1001').otp
        result = cast_vote(1, '1001', otp, {'rep': T3A_REP}, tagger)

        ballot = db.session.query(Ballot).one()
        entry = db.session.query(LedgerEntry).one()

    assert result.races == ['rep']
    assert ballot.ballot_id == entry.ballot_id == result.ballot_id
    assert ballot.candidate_id == T3A_REP
    assert ballot.audit_hash == tagger.ballot_tag('1001', 'rep', result.timestamp)
    assert entry.audit_hash == tagger.ledger_tag(result.ballot_id, 1)
    assert entry.races == 'rep'


def test_concurrent_cast_loses_on_conditional_update(app, tagger):
    """A cast that read has_voted_rep = false before another request flipped
    it must still be refused when it tries to claim the race."""
    with app.app_context():
        voter = db.session.get(Voter, '1002')
        otp = voter.otp
        assert voter.has_voted_rep is False

        # another request commits the rep vote behind this session's back
        db.session.execute(
            db.update(Voter).where(Voter.dni == '1002').values(has_voted_rep=True)
        )

        with pytest.raises(AlreadyVoted) as exc:
            ballots._claim_race('1002', 'rep')
        assert exc.value.code == 'AlreadyVoted:rep'
        db.session.rollback()

        assert db.session.get(Voter, '1002').otp == otp


def test_pin_rotation_refuses_replayed_pin(app):
    with app.app_context():
        voter = db.session.get(Voter, '1003')
        old = voter.otp
        ballots._rotate_otp('1003', old)
        with pytest.raises(InvalidPin):
            ballots._rotate_otp('1003', old)
        db.session.rollback()


def test_failed_cast_leaves_no_rows(app, tagger, monkeypatch):
    def broken_rotation(dni, old_otp):
        raise RuntimeError("database went away")

    monkeypatch.setattr(ballots, '_rotate_otp', broken_rotation)
    with app.app_context():
        otp = db.session.get(Voter, '1001').otp
        with pytest.raises(RuntimeError):
            cast_vote(1, '1001', otp, {'rep': T3A_REP}, tagger)

        assert db.session.query(Ballot).count() == 0
        assert db.session.query(LedgerEntry).count() == 0
        assert db.session.get(Voter, '1001').has_voted_rep is False


def test_unexpected_error_maps_to_internal_error(client, mesa_key, current_otp, monkeypatch):
    def broken_rotation(dni, old_otp):
        raise RuntimeError("database went away")

    monkeypatch.setattr(ballots, '_rotate_otp', broken_rotation)
    resp = client.post('/api/vote/cast', headers={'X-Mesa-Key': mesa_key},
                       json={'dni': '1001', 'otp': current_otp('1001'), 'rep': T3A_REP})
    assert resp.status_code == 200
    assert resp.get_json() == {'ok': False, 'error': 'Error interno', 'code': 'InternalError'}
