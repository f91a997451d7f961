from dataclasses import dataclass

DEFAULT_GROUP = "224.0.0.1"
DEFAULT_SERVICE = "discard"
DEFAULT_TIMEOUT = 0  # Wait for an interrupt only
DEFAULT_INTERFACE = ""  # Join on any interface

MAX_TIMEOUT = 3600
IFNAMSIZ = 16  # Source: <net/if.h>, includes the trailing NUL
BUFFER_SIZE = 2048


@dataclass(frozen=True)
class Configuration:
    """The validated settings for one run of the receiver."""

    interface: str = DEFAULT_INTERFACE
    quiet: bool = False
    timeout: int = DEFAULT_TIMEOUT
    group: str = DEFAULT_GROUP
    service: str = DEFAULT_SERVICE


def default_settings():
    """
    Returns a dictionary with the built-in listener settings, for the
    command line values to be laid over.
    """
    return {
        "interface": DEFAULT_INTERFACE,
        "quiet": False,
        "timeout": DEFAULT_TIMEOUT,
        "group": DEFAULT_GROUP,
        "service": DEFAULT_SERVICE,
    }
