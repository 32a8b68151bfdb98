from flask import current_app, request
from netplay import socketio
from netplay.models import SocketIOConnection


def _dispatcher():
    return current_app.extensions['room_dispatcher']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    sid = _get_sid()
    connection = SocketIOConnection(sid, request.namespace)  # type: ignore
    room_param = request.args.get('room')
    session = _dispatcher().on_connect(sid, room_param, connection)
    if session is None:
        # Full or unknown room: refuse the connection, nothing was created
        current_app.logger.info(f"[connect-refused] sid={sid} room={room_param}")
        return False
    current_app.logger.info(f"[connect] sid={sid} room={session.room.id} player={session.player.id}")


def handle_message(data):
    sid = _get_sid()
    try:
        _dispatcher().on_message(sid, data)
    except Exception:
        current_app.logger.exception(f"[message-error] sid={sid} data={data!r}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    _dispatcher().on_disconnect(sid)
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Transport errors reach us as a plain disconnect, so they share the
    clean-close path.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('message', handle_message, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
