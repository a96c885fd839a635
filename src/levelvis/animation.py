import enum
import logging
import threading
import time

from levelvis.constants import DEFAULT_TICK_PERIOD


class AnimationState(enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"


class AnimationScheduler:
    """
    Fixed-cadence animation loop running on a background thread.

    Each tick advances the smoother's idle motion and calls ``redraw``. The loop
    never waits on the producer; samples and ticks are decoupled.

    Cancellation is cooperative: ``stop`` sets the running loop's stop event,
    which the loop checks between ticks. Every loop gets its own event, and tick
    bodies are serialised, so a quick stop/start never leaves two loops ticking.

    A fault inside a tick is logged and ends that loop (fail-stop). The fault is
    kept for ``last_error`` and handed to ``on_error`` if one was given.
    """

    def __init__(
        self,
        smoother,
        redraw,
        tick_period=DEFAULT_TICK_PERIOD,
        logger=None,
        on_error=None,
        clock=time.time,
    ):
        self.smoother = smoother
        self.redraw = redraw
        self.tick_period = tick_period
        self.logger = logger or logging.getLogger(__name__)
        self.on_error = on_error
        self.clock = clock

        self._lock = threading.Lock()
        self._tick_lock = threading.Lock()
        self._state = AnimationState.IDLE
        self._stop_event = None
        self._thread = None
        self._last_update = None
        self._last_error = None

    @property
    def state(self):
        with self._lock:
            return self._state

    @property
    def is_active(self):
        return self.state is AnimationState.ACTIVE

    @property
    def last_update(self):
        """Timestamp of the most recent tick, or None before the first one."""
        with self._lock:
            return self._last_update

    def last_error(self):
        with self._lock:
            return self._last_error

    def start(self):
        with self._lock:
            if self._state is AnimationState.ACTIVE:
                return

            self._state = AnimationState.ACTIVE
            self._last_update = self.clock()
            self._last_error = None
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name="AnimationScheduler",
                daemon=True,
            )
            self._thread.start()

    def stop(self):
        with self._lock:
            # Only change state if actually animating to prevent double-stops
            if self._state is AnimationState.IDLE:
                return

            self._state = AnimationState.IDLE
            self._stop_event.set()
        self.logger.debug("Waveform animation stopped by explicit call")

    def join(self, timeout=None):
        """Wait for the most recent loop thread to finish."""
        with self._lock:
            thread = self._thread
        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout)

    def _run(self, stop_event):
        try:
            while not stop_event.is_set():
                with self._tick_lock:
                    # A stop may have landed while the previous loop held the lock
                    if stop_event.is_set():
                        break
                    self._tick()
                if stop_event.wait(self.tick_period):
                    break
        except Exception as e:
            self.logger.exception("Waveform animation stopped after a fault")
            self._fail(stop_event, e)

    def _tick(self):
        now = self.clock()
        self.smoother.advance_idle(now)

        with self._lock:
            self._last_update = now

        # The smoother lock is released by now; redraw may be slow
        self.redraw()

    def _fail(self, stop_event, error):
        with self._lock:
            stop_event.set()
            # A newer loop may already own the scheduler
            if self._stop_event is stop_event:
                self._state = AnimationState.IDLE
                self._last_error = error

        if self.on_error is not None:
            self.on_error(error)
