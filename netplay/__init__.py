from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
# always_connect: the connect handler sends CONNECTED, which must follow the
# handshake ack; a refused connection is then disconnected right away
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None, always_connect=True)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # The registry and dispatcher belong to this app instance, not the module
    from netplay.services.rooms import RoomRegistry
    from netplay.dispatcher import Dispatcher
    registry = RoomRegistry(
        max_rooms=flask_app.config['MAX_ROOMS'],
        players_per_room=flask_app.config['PLAYERS_PER_ROOM'],
        default_frame_rate=flask_app.config['DEFAULT_FRAME_RATE'],
        min_frame_rate=flask_app.config['MIN_FRAME_RATE'],
        max_frame_rate=flask_app.config['MAX_FRAME_RATE'],
        logger=flask_app.logger,
    )
    registry.precreate_rooms(flask_app.config['ROOM_POOL_SIZE'])
    flask_app.extensions['room_registry'] = registry
    flask_app.extensions['room_dispatcher'] = Dispatcher(registry)
    flask_app.logger.info(f"[startup] rooms={len(registry)} max_rooms={registry.max_rooms}")

    from netplay.main import main
    flask_app.register_blueprint(main)

    from netplay.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    @click.command('rooms')
    def rooms_command():
        """Prints occupancy of every registered room."""
        for room in registry:
            state = 'playing' if room.playing else 'idle'
            seats = ','.join(str(pid) for pid in sorted(room.players)) or '-'
            click.echo(f"room {room.id:>3}  players={room.num_players}  seats={seats}  {state}")

    flask_app.cli.add_command(rooms_command)

    return flask_app
