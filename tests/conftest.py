import pytest

from school_elections import create_app, db
from school_elections.database.models import Voter
from school_elections.seed import seed_demo


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test_secret',
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'elections.db'}",
        'SQLALCHEMY_ENGINE_OPTIONS': {},
        'AUDIT_LOG_DIR': str(tmp_path / 'logs'),
        'RATELIMIT_ENABLED': False,
        'PUBLIC_DIR': str(tmp_path / 'public'),
        'ADMIN_CODE': 'ADMIN-TEST',
    })
    with app.app_context():
        seed_demo(app.config['ADMIN_CODE'])
    yield app
    with app.app_context():
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def mesa_key(client):
    resp = client.post('/api/mesa/login', json={'mesa_code': 'MESA-1-2025'})
    return resp.get_json()['mesa_key']


@pytest.fixture
def current_otp(app):
    def read(dni):
        with app.app_context():
            return db.session.get(Voter, dni).otp
    return read


@pytest.fixture
def voter_state(app):
    def read(dni):
        with app.app_context():
            voter = db.session.get(Voter, dni)
            return voter.to_public_dict()
    return read
