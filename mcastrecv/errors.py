"""
Exceptions raised by the multicast receiver.
"""


class McastRecvError(Exception):
    """Base exception for fatal receiver errors"""
    pass


class ConfigurationError(McastRecvError):
    """Raised when the command line, group or interface is invalid"""
    pass


class SetupError(McastRecvError):
    """
    Raised when no usable socket could be created, bound and joined.

    Carries the name of the last step that failed and the OS error it
    produced.
    """

    def __init__(self, step, error):
        self.step = step
        self.error = error
        reason = error.strerror if getattr(error, "strerror", None) else str(error)
        super().__init__(f"{step}: {reason}")


class DeadlineInterruption(Exception):
    """Raised when the run deadline fired. Not an error, ends the receive loop."""
    pass
