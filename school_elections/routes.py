# school_elections/routes.py

# JSON API used by the station and admin screens, plus the static front end.
# Every domain failure is raised as an ElectionError and rendered as
# {"ok": false, "error": ...} by the handlers in __init__.py.

import os

from flask import Blueprint, abort, current_app, jsonify, request, send_from_directory

from school_elections import limiter
from school_elections.errors import ElectionError
from school_elections.operations.health_monitor import check_health
from school_elections.security.input_validator import InputValidator
from school_elections.voting.ballots import cast_vote
from school_elections.voting.stations import login_station, resolve_station
from school_elections.voting.tally import results, station_ledger
from school_elections.voting.voters import verify_voter

MESA_KEY_HEADER = 'X-Mesa-Key'

api = Blueprint('api', __name__, url_prefix='/api')
site = Blueprint('site', __name__)

validator = InputValidator()


def _voter_limit():
    return current_app.config['VOTER_RATELIMIT']


def _payload():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _audit():
    return current_app.extensions['audit_logger']


def _tagger():
    return current_app.extensions['audit_tagger']


def _current_station():
    return resolve_station(
        request.headers.get(MESA_KEY_HEADER),
        ttl_hours=current_app.config.get('MESA_SESSION_TTL_HOURS'),
    )


@api.route('/mesa/login', methods=['POST'])
def mesa_login():
    payload = _payload()
    (code,) = validator.require(payload, 'mesa_code')
    try:
        mesa_key, station = login_station(code)
    except ElectionError as e:
        _audit().log_security_event('mesa_login_failed', {'ip': request.remote_addr, 'reason': e.code})
        raise
    _audit().log_security_event('mesa_login', {'ip': request.remote_addr}, station_id=station.id)
    current_app.logger.info("Mesa %s logged in", station.id)
    return jsonify({'ok': True, 'mesa_key': mesa_key})


@api.route('/voter/verify', methods=['POST'])
@limiter.limit(_voter_limit)
def voter_verify():
    mesa_id = _current_station()
    dni, otp = validator.require(_payload(), 'dni', 'otp')
    try:
        voter, races = verify_voter(dni, otp)
    except ElectionError as e:
        _audit().log_security_event('voter_verify_failed',
                                    {'voter_ref': _tagger().voter_ref(dni), 'reason': e.code},
                                    station_id=mesa_id)
        raise
    return jsonify({'ok': True, 'voter': voter.to_public_dict(), 'races': races})


@api.route('/vote/cast', methods=['POST'])
@limiter.limit(_voter_limit)
def vote_cast():
    mesa_id = _current_station()
    payload = _payload()
    dni, otp = validator.require(payload, 'dni', 'otp')
    selections = {race: validator.optional(payload, race) for race in ('rep', 'amb', 'per')}
    try:
        cast = cast_vote(mesa_id, dni, otp, selections, _tagger())
    except ElectionError as e:
        _audit().log_security_event('vote_rejected',
                                    {'voter_ref': _tagger().voter_ref(dni), 'reason': e.code},
                                    station_id=mesa_id)
        raise
    _audit().log_security_event('vote_cast',
                                {'ballot_id': cast.ballot_id, 'races': cast.races,
                                 'voter_ref': cast.voter_ref},
                                station_id=mesa_id)
    return jsonify({'ok': True, 'receipt': cast.ballot_id})


@api.route('/mesa/ledger', methods=['GET'])
def mesa_ledger():
    mesa_id = _current_station()
    items = station_ledger(mesa_id, limit=current_app.config['LEDGER_LIMIT'])
    return jsonify({'ok': True, 'items': items})


@api.route('/admin/results', methods=['POST'])
def admin_results():
    (code,) = validator.require(_payload(), 'code')
    try:
        summary = results(code)
    except ElectionError:
        _audit().log_security_event('results_denied', {'ip': request.remote_addr})
        raise
    _audit().log_security_event('results_accessed', {'ip': request.remote_addr})
    return jsonify({'ok': True, 'results': summary})


@api.route('/health', methods=['GET'])
@limiter.exempt
def health():
    report = check_health()
    return jsonify(report), 200 if report['ok'] else 503


@site.route('/')
def index():
    folder = current_app.static_folder
    if not folder or not os.path.exists(os.path.join(folder, 'index.html')):
        abort(404)
    return send_from_directory(folder, 'index.html')
