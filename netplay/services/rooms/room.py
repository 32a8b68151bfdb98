import logging
import threading
from typing import Dict, Optional

from netplay.models import Player
from netplay.protocol import Msg
from .clock import FrameClock


DEFAULT_FRAME_RATE = 50
MIN_FRAME_RATE = 1
MAX_FRAME_RATE = 100


def clamp_frame_rate(value, default: int = DEFAULT_FRAME_RATE,
                     lo: int = MIN_FRAME_RATE, hi: int = MAX_FRAME_RATE) -> int:
    """Coerce a requested frame rate into ``[lo, hi]``.

    Missing or non-numeric values mean ``default``. Zero is a rate nobody can
    play at, so it is read as "no rate given" and also means ``default``
    rather than being clamped up to ``lo``.
    """
    try:
        rate = int(value)
    except (TypeError, ValueError):
        return default
    if not rate:
        return default
    return max(lo, min(hi, rate))


class Room:
    """Two-seat session: who is connected, whether the frame clock runs, and
    which players have acknowledged the last file load.

    Every public method takes the room lock, so the dispatchers of both
    players and the clock thread see a consistent room.
    """

    def __init__(self, id: int, players_per_room: int = 2,
                 default_frame_rate: int = DEFAULT_FRAME_RATE,
                 min_frame_rate: int = MIN_FRAME_RATE,
                 max_frame_rate: int = MAX_FRAME_RATE,
                 clock_factory=FrameClock, logger=None):
        self.id = id
        self.players: Dict[int, Player] = {}
        self.players_per_room = players_per_room
        self.default_frame_rate = default_frame_rate
        self.min_frame_rate = min_frame_rate
        self.max_frame_rate = max_frame_rate
        self.frame_rate: Optional[int] = None
        self._clock_factory = clock_factory
        self._clock = None
        self._lock = threading.RLock()
        self.logger = logger or logging.getLogger(__name__)

    @property
    def playing(self) -> bool:
        return self._clock is not None

    @property
    def num_players(self) -> int:
        return len(self.players)

    def is_empty(self) -> bool:
        return not self.players

    def is_full(self) -> bool:
        return len(self.players) >= self.players_per_room

    def next_player_id(self) -> Optional[int]:
        """Lowest free seat, or None when the room is full."""
        with self._lock:
            for slot in range(1, self.players_per_room + 1):
                if slot not in self.players:
                    return slot
            return None

    def add_player(self, player: Player) -> None:
        with self._lock:
            if player.id in self.players:
                return
            # Pause first so both ends agree the session stopped
            self.stop()
            self.broadcast(Msg.REMOTE_CONNECTED, player.id)
            self.players[player.id] = player
            player.send(Msg.CONNECTED, self.id, player.id)
            self.logger.info(f"[room-join] room={self.id} player={player.id} players={len(self.players)}")

    def remove_player(self, player: Player) -> None:
        with self._lock:
            if self.players.get(player.id) is not player:
                return
            del self.players[player.id]
            self.stop()
            self.broadcast(Msg.REMOTE_DISCONNECTED, player.id)
            self.logger.info(f"[room-leave] room={self.id} player={player.id} players={len(self.players)}")

    def start(self, frame_rate=None) -> None:
        with self._lock:
            if self.playing:
                return
            # A lone player may start the clock on their own
            if len(self.players) > 1 and not all(p.ready for p in self.players.values()):
                self.logger.info(f"[room-play-skip] room={self.id} not all players ready")
                return
            rate = clamp_frame_rate(frame_rate, self.default_frame_rate,
                                    self.min_frame_rate, self.max_frame_rate)
            clock = self._clock_factory(1.0 / rate, self._tick)
            self._clock = clock
            self.frame_rate = rate
            clock.start()
            self.broadcast(Msg.PLAY)
            self.logger.info(f"[room-play] room={self.id} fps={rate}")

    def stop(self) -> None:
        with self._lock:
            if not self.playing:
                return
            self._clock.cancel()
            self._clock = None
            self.frame_rate = None
            self.broadcast(Msg.PAUSE)
            self.logger.info(f"[room-pause] room={self.id}")

    def load_file(self, file_id) -> None:
        with self._lock:
            self.stop()
            for p in self.players.values():
                p.ready = False
            self.broadcast(Msg.LOAD_FILE, file_id)
            self.logger.info(f"[room-load] room={self.id} file={file_id}")

    def on_file_loaded(self, file_id, player_id: int) -> None:
        with self._lock:
            player = self.players.get(player_id)
            if player is None:
                return
            player.ready = True
            self.logger.info(f"[room-ready] room={self.id} player={player_id} file={file_id}")

    def broadcast(self, msg, *args) -> None:
        with self._lock:
            players = list(self.players.values())
        for p in players:
            p.send(msg, *args)

    def _tick(self, clock) -> None:
        with self._lock:
            # A tick racing stop() must not leak a FRAME
            if self._clock is not clock:
                return
            try:
                self.broadcast(Msg.FRAME)
            except Exception:
                self.logger.exception(f"[room-frame-error] room={self.id}")

    def to_dict(self):
        with self._lock:
            return {
                'id': self.id,
                'players': [p.to_dict() for p in sorted(self.players.values(), key=lambda p: p.id)],
                'playing': self.playing,
                'frame_rate': self.frame_rate,
            }

    def __repr__(self):
        return f"<Room {self.id} players={sorted(self.players)} playing={self.playing}>"
