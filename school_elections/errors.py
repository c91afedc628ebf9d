# school_elections/errors.py
"""Election error hierarchy.

Every failure the API reports is an ElectionError. Each carries a stable
``code`` for clients and a human-readable ``message`` for the operator
screen. Handlers in routes.py turn them into ``{"ok": false, ...}`` bodies.
"""

RACE_LABELS = {
    'rep': 'representante',
    'amb': 'líder ambiental',
    'per': 'personería',
}


class ElectionError(Exception):
    code = 'ElectionError'
    message = 'Error'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self):
        return {'ok': False, 'error': self.message, 'code': self.code}


class MissingField(ElectionError):
    code = 'MissingField'

    def __init__(self, field):
        self.field = field
        super().__init__(f'Falta {field}')


class InvalidStationCode(ElectionError):
    code = 'InvalidStationCode'
    message = 'Código inválido'


class StationNotAuthenticated(ElectionError):
    code = 'StationNotAuthenticated'
    message = 'Mesa no autenticada'


class VoterNotFound(ElectionError):
    code = 'VoterNotFound'
    message = 'No encontrado'


class VoterBlocked(ElectionError):
    code = 'VoterBlocked'
    message = 'Bloqueado, dirígete a coordinación'


class InvalidPin(ElectionError):
    code = 'InvalidPin'
    message = 'PIN incorrecto'


class AlreadyVoted(ElectionError):
    def __init__(self, race):
        self.race = race
        self.code = f'AlreadyVoted:{race}'
        super().__init__(f'Ya votó {RACE_LABELS.get(race, race)}')


class InvalidCandidate(ElectionError):
    def __init__(self, race):
        self.race = race
        self.code = f'InvalidCandidate:{race}'
        super().__init__(f'Candidato inválido para {RACE_LABELS.get(race, race)}')


class InvalidAdminCode(ElectionError):
    code = 'InvalidAdminCode'
    message = 'Código inválido'


class InternalError(ElectionError):
    code = 'InternalError'
    message = 'Error interno'
