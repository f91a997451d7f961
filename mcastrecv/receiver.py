import sys


class ReceiveStats:
    """Packet and byte totals for one run of the receive loop."""

    def __init__(self):
        self.packets = 0
        self.total_bytes = 0

    def add(self, nbytes):
        self.packets += 1
        self.total_bytes += nbytes

    def __repr__(self):
        return f"ReceiveStats(packets={self.packets}, total_bytes={self.total_bytes})"


def format_packet(host, port, nbytes):
    return f"received from {host}:{port} ({nbytes})"


def format_report(stats):
    return f"\n{stats.packets} packets ({stats.total_bytes} byte) received."


def receive_loop(gsock, deadline, quiet=False, out=None):
    """
    Receives datagrams until the deadline fires and returns the totals.

    Each datagram is counted once it has been fully received; the cancelled
    result from the socket ends the loop without counting anything.
    """
    if out is None:
        out = sys.stdout
    stats = ReceiveStats()

    while True:
        result = gsock.receive(deadline)
        if result is None:
            break

        nbytes, (host, port) = result
        stats.add(nbytes)
        if not quiet:
            print(format_packet(host, port, nbytes), file=out)

    return stats


def report(stats, gsock, out=None):
    """Prints the final totals and releases the socket."""
    if out is None:
        out = sys.stdout
    print(format_report(stats), file=out)
    gsock.close()
