from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = [flask_app.config['CLIENT_URL']]
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One registry per application; handlers reach it through current_app
    from sabotage4.services.games.registry import GameRegistry
    flask_app.extensions['game_registry'] = GameRegistry(
        id_bytes=flask_app.config.get('GAME_ID_BYTES', 4),
    )

    # Import and register blueprints here
    from sabotage4.routes import main
    flask_app.register_blueprint(main)

    from sabotage4.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    # Register Socket.IO event handlers
    from sabotage4.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    @click.command('serve')
    @click.option('--host', default=None, help='Interface to bind (defaults to HOST).')
    @click.option('--port', default=None, type=int, help='Port to listen on (defaults to PORT).')
    def serve_command(host, port):
        """Runs the game server with Socket.IO enabled."""
        host = host or flask_app.config['HOST']
        port = port or flask_app.config['PORT']
        flask_app.logger.info(f"[serve] listening on {host}:{port}")
        socketio.run(flask_app, host=host, port=port, allow_unsafe_werkzeug=True)

    flask_app.cli.add_command(serve_command)

    return flask_app
