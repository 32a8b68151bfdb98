import time

from netplay import socketio


class FrameClock:
    """Repeating background task that calls ``on_tick(clock)`` every
    ``interval`` seconds until cancelled.

    ``cancel()`` wakes the task so it exits right away instead of after its
    current wait. The owner still checks clock identity under its own lock
    inside ``on_tick``, so a tick already in flight when ``cancel()`` is
    called is dropped.
    """

    def __init__(self, interval: float, on_tick):
        self.interval = interval
        self.on_tick = on_tick
        # Event type matches the server's async mode (threading/eventlet/gevent)
        self._stopped = socketio.server.eio.create_event()
        self.task = None

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()

    def start(self) -> None:
        self.task = socketio.start_background_task(self._run)

    def cancel(self) -> None:
        self._stopped.set()

    def _run(self) -> None:
        next_at = time.monotonic() + self.interval
        while not self._stopped.wait(max(0.0, next_at - time.monotonic())):
            self.on_tick(self)
            next_at += self.interval
            # Don't try to catch up after a long stall
            now = time.monotonic()
            if next_at < now:
                next_at = now
