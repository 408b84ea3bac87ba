import json

import click
from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    origins = flask_app.config.get('CORS_ORIGINS') or []
    CORS(flask_app, supports_credentials=True, origins=origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    # One game per process: the app owns its store and dispatcher
    from phrasebuzz.services.game import GameDispatcher, GameStore
    from phrasebuzz.services.game.notifier import SocketIONotifier
    from phrasebuzz.services.game.photos import DirectoryPhotoStore, InlinePhotoStore
    from phrasebuzz.services.game.scheduler import ReenableScheduler

    photo_dir = flask_app.config.get('WINNER_PHOTO_DIR')
    flask_app.extensions['game'] = GameDispatcher(
        store=GameStore(
            flask_app.config.get('DEFAULT_PHRASE', 'MARK SHIBLEY'),
            skip_turn_after_guess=flask_app.config.get('SKIP_TURN_AFTER_GUESS', True),
        ),
        notifier=SocketIONotifier(socketio),
        photo_store=DirectoryPhotoStore(photo_dir) if photo_dir else InlinePhotoStore(),
        channel=flask_app.config.get('BROADCAST_CHANNEL', 'game-channel'),
        reenable_delay_ms=int(flask_app.config.get('BUZZER_REENABLE_DELAY_MS', 5000)),
        scheduler=ReenableScheduler(flask_app, socketio),
        logger=flask_app.logger,
    )

    # Import and register blueprints here
    from phrasebuzz.main import main
    flask_app.register_blueprint(main)

    from phrasebuzz.api.game import game
    flask_app.register_blueprint(game, url_prefix='/api/game')

    # Register Socket.IO event handlers
    from phrasebuzz.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('game-reset')
    def game_reset_command():
        """Clears players and the round, keeping the phrase."""
        flask_app.extensions['game'].reset()
        click.echo('Game has been reset!')

    @click.command('game-show')
    def game_show_command():
        """Prints the host view of the game, phrase included."""
        click.echo(json.dumps(flask_app.extensions['game'].host_state(), indent=2))

    flask_app.cli.add_command(game_reset_command)
    flask_app.cli.add_command(game_show_command)

    return flask_app
