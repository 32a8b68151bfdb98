import threading
from typing import Dict, Optional

from netplay.models import Player
from netplay.protocol import Msg, decode_message, message_type
from netplay.services.rooms import Room, RoomRegistry


def parse_room_param(value) -> Optional[int]:
    """Room id requested in the handshake, or None to auto-pair.

    Only a positive integer counts as an explicit request; a missing, zero,
    negative or garbled value means "put me anywhere".
    """
    if value is None:
        return None
    try:
        room_id = int(str(value).strip())
    except ValueError:
        return None
    return room_id if room_id > 0 else None


class Session:
    """What one connection joined: its room and its seat in that room."""

    def __init__(self, room: Room, player: Player):
        self.room = room
        self.player = player

    def __repr__(self):
        return f"<Session room={self.room.id} player={self.player.id}>"


class Dispatcher:
    """Routes transport events for every connection to room operations.

    Keyed by connection sid; events for one sid arrive in order, events for
    different sids may interleave.
    """

    def __init__(self, registry: RoomRegistry):
        self.registry = registry
        self.sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def on_connect(self, sid: str, room_param, connection) -> Optional[Session]:
        """Join a room for ``sid``; None means the connection must be closed."""
        joined = self.registry.join(parse_room_param(room_param), connection)
        if joined is None:
            return None
        room, player = joined
        session = Session(room, player)
        with self._lock:
            self.sessions[sid] = session
        return session

    def on_message(self, sid: str, text) -> None:
        session = self.sessions.get(sid)
        if session is None:
            return
        raw_type, args = decode_message(text)
        msg = message_type(raw_type)
        if msg is None:
            return
        self.route(session, msg, args)

    def route(self, session: Session, msg: Msg, args) -> None:
        room, player = session.room, session.player
        arg0 = args[0] if len(args) > 0 else None
        arg1 = args[1] if len(args) > 1 else None

        if msg == Msg.PLAY:
            room.start(arg0)
        elif msg == Msg.PAUSE:
            room.stop()
        elif msg in (Msg.BUTTON_DOWN, Msg.BUTTON_UP):
            room.broadcast(msg, arg0, arg1)
        elif msg == Msg.LOAD_FILE:
            room.load_file(arg0)
        elif msg == Msg.FILE_LOADED:
            room.on_file_loaded(arg0, player.id)
        elif msg in (Msg.RELOAD, Msg.CLOSE):
            room.stop()
            room.broadcast(msg)
        elif msg in (Msg.MUTE, Msg.UNMUTE):
            room.broadcast(msg)

    def on_disconnect(self, sid: str) -> None:
        with self._lock:
            session = self.sessions.pop(sid, None)
        if session is None:
            return
        session.room.remove_player(session.player)
