from flask import Flask, current_app
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def get_session():
    """Return the BenchmarkSession bound to the current app."""
    return current_app.extensions['humanbench']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from humanbench.services.benchmarks import (
        BackgroundScheduler,
        BenchmarkSession,
        ManualScheduler,
        ScoreStore,
    )
    from humanbench.services.benchmarks.scores import STORAGE_KEY
    from humanbench.services.storage import SQLAlchemyBackend

    # Deterministic clock in tests unless explicitly asked for real timers
    if flask_app.config.get('TESTING') and not flask_app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        scheduler = ManualScheduler()
    else:
        scheduler = BackgroundScheduler(socketio)

    store = ScoreStore(
        SQLAlchemyBackend(flask_app),
        key=flask_app.config.get('SCORES_STORAGE_KEY') or STORAGE_KEY,
    )

    def broadcast(event):
        socketio.emit(event.name, event.to_dict(), namespace='/ws')

    cfg = flask_app.config
    flask_app.extensions['humanbench'] = BenchmarkSession(
        store,
        scheduler,
        on_event=broadcast,
        reaction_min_delay_ms=cfg.get('REACTION_MIN_DELAY_MS', 2000),
        reaction_max_delay_ms=cfg.get('REACTION_MAX_DELAY_MS', 5000),
        chimp_reveal_ms=cfg.get('CHIMP_REVEAL_MS', 1000),
        chimp_next_round_ms=cfg.get('CHIMP_NEXT_ROUND_MS', 600),
    )

    from humanbench.api.benchmarks import benchmarks
    flask_app.register_blueprint(benchmarks, url_prefix='/api')

    from humanbench.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('db-init')
    def db_init_command():
        """Creates the score tables."""
        import humanbench.models  # noqa: F401
        with flask_app.app_context():
            db.create_all()
            print('Database tables created.')

    @click.command('scores-show')
    def scores_show_command():
        """Prints the stored best scores."""
        for category, value in store.bests().items():
            print(f"{category}: {value if value is not None else '-'}")

    @click.command('scores-clear')
    def scores_clear_command():
        """Removes all stored best scores."""
        store.clear_all()
        print('Scores cleared.')

    flask_app.cli.add_command(db_init_command)
    flask_app.cli.add_command(scores_show_command)
    flask_app.cli.add_command(scores_clear_command)

    return flask_app
