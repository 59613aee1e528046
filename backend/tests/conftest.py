import os
import sys
import random
import pytest

# Ensure the backend root (containing the `humanbench` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from humanbench import create_app, db, socketio
from humanbench.services.benchmarks import ManualScheduler, MemoryBackend, ScoreStore


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SCORES_STORAGE_KEY = 'human-benchmark-scores'
    CORS_ORIGINS = ['http://localhost:5173']


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import humanbench.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def session(flask_app):
    return flask_app.extensions['humanbench']


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def store():
    return ScoreStore(MemoryBackend())


@pytest.fixture()
def scheduler():
    return ManualScheduler(start_ms=1000.0)


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def events():
    """Collects emitted events; pass ``events.append`` as a listener."""
    return []
