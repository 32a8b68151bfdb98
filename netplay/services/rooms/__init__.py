"""Room services: matchmaking registry, per-room session state and the
frame clock.

Nothing in here knows about Socket.IO events; the dispatcher translates
inbound messages into calls on these objects and the objects talk back to
clients only through their players' connections.
"""
from .clock import FrameClock
from .registry import RoomRegistry
from .room import Room

__all__ = ['FrameClock', 'Room', 'RoomRegistry']
