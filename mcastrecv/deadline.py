import signal
import socket

from .errors import DeadlineInterruption

# Signals that end the run. SIGALRM is the countdown, the rest are the
# operator asking us to stop.
INTERRUPT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class Deadline:
    """
    A one-shot cancellation token for the receive loop.

    The token fires at most once, either when the countdown armed by arm()
    expires or when the process receives an interrupt. Firing sets a flag
    and makes fileno() readable, so a thread blocked in select() on it
    together with a data socket wakes up even though the receive itself has
    no timeout. The flag is never reset.
    """

    def __init__(self):
        self._fired = False
        self._armed = False
        self._previous_handlers = {}
        self._wake_r, self._wake_w = socket.socketpair()
        self._wake_w.setblocking(False)

    @property
    def fired(self):
        return self._fired

    def fileno(self):
        return self._wake_r.fileno()

    def fire(self):
        """Fires the deadline. Only the first call has any effect."""
        if self._fired:
            return
        self._fired = True
        self._wake_w.send(b"\0")

    def check(self):
        """Raises DeadlineInterruption once the deadline has fired."""
        if self._fired:
            raise DeadlineInterruption()

    def _signal_handler(self, signum, frame):
        self.fire()

    def arm(self, timeout):
        """
        Installs the interrupt handlers and starts the countdown.

        A timeout of 0 arms no countdown: only an interrupt ends the run.
        Must be called from the main thread.
        """
        if self._armed:
            raise RuntimeError("Deadline is already armed.")

        for signum in INTERRUPT_SIGNALS + (signal.SIGALRM,):
            self._previous_handlers[signum] = signal.signal(
                signum, self._signal_handler
            )
        self._armed = True

        if timeout > 0:
            signal.setitimer(signal.ITIMER_REAL, timeout)

    def disarm(self):
        """Cancels any pending countdown and restores the previous handlers."""
        if not self._armed:
            return
        signal.setitimer(signal.ITIMER_REAL, 0)
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, signal.SIG_DFL if handler is None else handler)
        self._previous_handlers.clear()
        self._armed = False

    def close(self):
        self.disarm()
        self._wake_r.close()
        self._wake_w.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
