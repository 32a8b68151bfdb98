import os


def _env_int(name, default):
    try:
        return int(os.environ.get(name, str(default)))
    except ValueError:
        return default


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Listening port for run.py
    PORT = _env_int('PORT', 3000)
    # Socket.IO namespace clients connect to
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Rooms created at startup so the first connections don't pay for it
    ROOM_POOL_SIZE = _env_int('ROOM_POOL_SIZE', 64)
    MAX_ROOMS = _env_int('MAX_ROOMS', 256)
    PLAYERS_PER_ROOM = 2
    # Frame clock rate (frames per second), clamped to [MIN, MAX]
    DEFAULT_FRAME_RATE = _env_int('DEFAULT_FRAME_RATE', 50)
    MIN_FRAME_RATE = 1
    MAX_FRAME_RATE = 100
