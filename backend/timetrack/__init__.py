from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

RPC_NAMESPACE = '/rpc'


def create_app(config_class=Config, api=None):
    """HTTP front-end. Routes REST verbs to an ``Api`` instance.

    When no ``api`` is given, one is built over a ``RemoteStore`` that
    connects to the storage backend on first use.
    """
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    from timetrack.json_provider import IsoJSONProvider
    flask_app.json = IsoJSONProvider(flask_app)

    origins = flask_app.config.get('CORS_ORIGINS', '*')
    if isinstance(origins, str) and origins != '*':
        origins = [o.strip() for o in origins.split(',') if o.strip()]
    CORS(flask_app, origins=origins)

    if api is None:
        from timetrack.services import Api
        from timetrack.store.client import RemoteStore
        api = Api(RemoteStore.from_config(flask_app.config))
    flask_app.extensions['timetrack'] = api

    from timetrack.main import main
    flask_app.register_blueprint(main)

    from timetrack.api.timers import timers
    flask_app.register_blueprint(timers, url_prefix='/timers')

    from timetrack.api.groups import groups
    flask_app.register_blueprint(groups, url_prefix='/groups')

    return flask_app


def create_backend(config_class=Config):
    """Storage backend. Serves the sorted key-value store over Socket.IO."""
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    migrate.init_app(flask_app, db)

    password = flask_app.config.get('BACKEND_PASSWD')
    flask_app.config['BACKEND_PASSWD_HASH'] = (
        bcrypt.generate_password_hash(password) if password else None
    )

    socketio.init_app(flask_app)

    # Handlers must be registered after init_app so they bind to this server
    from timetrack.rpc_events import register_rpc_handlers
    register_rpc_handlers()

    from timetrack import models  # noqa: F401

    @click.command('store-reset')
    def store_reset_command():
        """Drops and recreates the key-value table."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Store has been reset!')

    flask_app.cli.add_command(store_reset_command)

    return flask_app
