from netplay import socketio
from netplay.protocol import encode_message


class SocketIOConnection:
    """One client's Socket.IO connection, addressed by its sid."""

    def __init__(self, sid: str, namespace: str = '/'):
        self.sid = sid
        self.namespace = namespace

    def send(self, text: str) -> None:
        # Queued per sid by the Socket.IO server; never waits on the peer
        socketio.send(text, to=self.sid, namespace=self.namespace)

    def __repr__(self):
        return f"<SocketIOConnection {self.sid}>"


class Player:
    def __init__(self, id: int, connection):
        self.id = id
        self.connection = connection
        self.ready = False

    def send(self, msg, *args) -> None:
        self.connection.send(encode_message(msg, *args))

    def to_dict(self):
        return {
            'id': self.id,
            'ready': self.ready,
        }

    def __repr__(self):
        return f"<Player {self.id} ready={self.ready}>"
