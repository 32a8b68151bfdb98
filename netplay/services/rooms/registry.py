import logging
import threading
from typing import Dict, Optional, Tuple

from netplay.models import Player
from .clock import FrameClock
from .room import Room, DEFAULT_FRAME_RATE, MIN_FRAME_RATE, MAX_FRAME_RATE


class RoomRegistry:
    """All rooms of one server, keyed by id in creation order.

    Rooms are never removed: an emptied room keeps its id and is handed out
    again by :meth:`find_empty_room`.
    """

    def __init__(self, max_rooms: int = 256, players_per_room: int = 2,
                 default_frame_rate: int = DEFAULT_FRAME_RATE,
                 min_frame_rate: int = MIN_FRAME_RATE,
                 max_frame_rate: int = MAX_FRAME_RATE,
                 clock_factory=FrameClock, logger=None):
        self.rooms: Dict[int, Room] = {}
        self.max_rooms = max_rooms
        self.players_per_room = players_per_room
        self.default_frame_rate = default_frame_rate
        self.min_frame_rate = min_frame_rate
        self.max_frame_rate = max_frame_rate
        self.clock_factory = clock_factory
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()

    def __len__(self):
        return len(self.rooms)

    def __iter__(self):
        return iter(list(self.rooms.values()))

    def get(self, room_id) -> Optional[Room]:
        return self.rooms.get(room_id)

    def create_room(self) -> Optional[Room]:
        with self._lock:
            count = len(self.rooms)
            if count >= self.max_rooms:
                self.logger.warning(f"[registry-full] rooms={count}")
                return None
            room = Room(
                count + 1,
                players_per_room=self.players_per_room,
                default_frame_rate=self.default_frame_rate,
                min_frame_rate=self.min_frame_rate,
                max_frame_rate=self.max_frame_rate,
                clock_factory=self.clock_factory,
                logger=self.logger,
            )
            self.rooms[room.id] = room
            return room

    def precreate_rooms(self, num: int) -> None:
        for _ in range(num):
            if self.create_room() is None:
                break

    def find_room(self, room_id) -> Optional[Room]:
        room = self.rooms.get(room_id)
        if room is None or room.is_full():
            return None
        return room

    def find_empty_room(self) -> Optional[Room]:
        with self._lock:
            for room in self.rooms.values():
                if room.is_empty():
                    return room
            return self.create_room()

    def join(self, room_id: Optional[int], connection) -> Optional[Tuple[Room, Player]]:
        """Seat ``connection`` in a room.

        A positive ``room_id`` must name an existing room with a free seat;
        anything else auto-pairs into the first empty room. Returns
        ``(room, player)``, or None when the connection has to be refused, in
        which case no room was touched.
        """
        with self._lock:
            if room_id:
                room = self.find_room(room_id)
            else:
                room = self.find_empty_room()
            if room is None:
                self.logger.info(f"[room-reject] requested={room_id}")
                return None
            player_id = room.next_player_id()
            if player_id is None:
                return None
            player = Player(player_id, connection)
            room.add_player(player)
            return room, player

    def summary(self):
        return [room.to_dict() for room in self]
