# school_elections/database/models.py

from datetime import datetime, timezone

from school_elections import db

RACES = ('rep', 'amb', 'per')


def utcnow():
    return datetime.now(timezone.utc)


class AdminCode(db.Model):
    __tablename__ = 'admin'
    code = db.Column(db.String(128), primary_key=True)


class PollingStation(db.Model):
    __tablename__ = 'mesas'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100))
    code = db.Column(db.String(64), unique=True, nullable=False)
    code_hash = db.Column(db.String(200), default='')  # never read

    sessions = db.relationship('StationSession', backref='station', lazy=True)

    def __repr__(self):
        return f'<PollingStation {self.id} {self.name}>'


class StationSession(db.Model):
    __tablename__ = 'mesa_keys'
    key = db.Column(db.String(64), primary_key=True)
    mesa_id = db.Column(db.Integer, db.ForeignKey('mesas.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)


class Voter(db.Model):
    __tablename__ = 'voters'
    dni = db.Column(db.String(32), primary_key=True)
    name = db.Column(db.String(200))
    course = db.Column(db.String(32), index=True)
    otp = db.Column(db.String(16))
    is_blocked = db.Column(db.Boolean, default=False, nullable=False)
    has_voted_rep = db.Column(db.Boolean, default=False, nullable=False)
    has_voted_amb = db.Column(db.Boolean, default=False, nullable=False)
    has_voted_per = db.Column(db.Boolean, default=False, nullable=False)

    def has_voted(self, race):
        return bool(getattr(self, f'has_voted_{race}'))

    def to_public_dict(self):
        # otp stays server side
        return {
            'dni': self.dni,
            'name': self.name,
            'course': self.course,
            'is_blocked': bool(self.is_blocked),
            'has_voted': {race: self.has_voted(race) for race in RACES},
        }

    def __repr__(self):
        return f'<Voter {self.dni} {self.course}>'


class Candidate(db.Model):
    __tablename__ = 'candidates'
    id = db.Column(db.String(200), primary_key=True)
    race = db.Column(db.String(8), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    detail = db.Column(db.String(200), default='')
    course = db.Column(db.String(32), nullable=True)  # NULL: whole school

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'detail': self.detail or ''}


class Ballot(db.Model):
    __tablename__ = 'ballots'
    id = db.Column(db.Integer, primary_key=True)
    ballot_id = db.Column(db.String(64), nullable=False, index=True)
    mesa_id = db.Column(db.Integer, db.ForeignKey('mesas.id'), nullable=False, index=True)
    race = db.Column(db.String(8), nullable=False, index=True)
    candidate_id = db.Column(db.String(200))
    created_at = db.Column(db.DateTime(timezone=True), nullable=False)
    audit_hash = db.Column(db.String(64))

    def __repr__(self):
        return f'<Ballot {self.ballot_id} {self.race}>'


class LedgerEntry(db.Model):
    __tablename__ = 'ledger'
    id = db.Column(db.Integer, primary_key=True)
    ballot_id = db.Column(db.String(64), nullable=False)
    mesa_id = db.Column(db.Integer, db.ForeignKey('mesas.id'), nullable=False, index=True)
    timestamp = db.Column(db.DateTime(timezone=True), nullable=False)
    races = db.Column(db.String(32), default='')
    audit_hash = db.Column(db.String(64))

    def race_list(self):
        return [race for race in (self.races or '').split(',') if race]

    def to_dict(self):
        return {
            'ballot_id': self.ballot_id,
            'timestamp': self.timestamp.isoformat(),
            'races': self.race_list(),
            'audit_hash': self.audit_hash,
        }
