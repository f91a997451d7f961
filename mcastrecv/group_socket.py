import select
import socket
import struct
import sys
from collections import namedtuple

from .config import BUFFER_SIZE
from .errors import ConfigurationError, DeadlineInterruption, SetupError

# Steps of the setup sequence, named in SetupError when all candidates fail.
STEP_SOCKET = "socket"
STEP_BIND = "bind"
STEP_ADD_MEMBERSHIP = "add-membership"


class MembershipRequest(namedtuple("MembershipRequest", ["group", "interface"])):
    """
    A multicast group plus the local interface address to join it on.
    Both are dotted-quad strings; interface is 0.0.0.0 for any interface.
    """

    __slots__ = ()

    def pack(self):
        """Packs the request into a struct ip_mreq for IP_ADD_MEMBERSHIP."""
        return struct.pack(
            "4s4s", socket.inet_aton(self.group), socket.inet_aton(self.interface)
        )


def parse_group(group):
    """Checks that the group literal is a dotted-quad IPv4 address."""
    try:
        socket.inet_aton(group)
    except (OSError, TypeError):
        raise ConfigurationError(f"{group}: invalid multicast group")
    return group


def resolve_service(service):
    """
    Resolves a service name or port number into passive IPv4 UDP bind
    candidates, in the order the resolver returns them.
    """
    try:
        return socket.getaddrinfo(
            None, service, socket.AF_INET, socket.SOCK_DGRAM, 0, socket.AI_PASSIVE
        )
    except socket.gaierror as e:
        raise ConfigurationError(f"{service}: {e.strerror}")


class GroupSocket:
    """
    A UDP socket bound to a service port with multicast membership added.

    Use GroupSocket.open() to build one. The socket is owned by this object
    and released by close().
    """

    def __init__(self, sock):
        self.sock = sock

    @classmethod
    def open(cls, membership, service):
        """
        Creates, binds and joins a socket for the first resolved candidate
        that gets through all three steps.

        Raises ConfigurationError for a bad group literal or unknown service,
        and SetupError naming the last failed step when no candidate works.
        """
        parse_group(membership.group)
        mreq = membership.pack()

        step, last_error = STEP_SOCKET, None
        for family, socktype, proto, _, sockaddr in resolve_service(service):
            try:
                sock = socket.socket(family, socktype, proto)
            except OSError as e:
                step, last_error = STEP_SOCKET, e
                continue

            try:
                sock.bind(sockaddr)
            except OSError as e:
                step, last_error = STEP_BIND, e
                sock.close()
                continue

            try:
                sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, mreq)
            except OSError as e:
                step, last_error = STEP_ADD_MEMBERSHIP, e
                sock.close()
                continue

            print(
                f"[INFO] Joined {membership.group} on {membership.interface}, "
                f"listening on port {sockaddr[1]}",
                file=sys.stderr,
            )
            return cls(sock)

        if last_error is None:
            last_error = OSError(f"no usable address for service {service}")
        raise SetupError(step, last_error)

    def fileno(self):
        return self.sock.fileno()

    def receive(self, deadline, bufsize=BUFFER_SIZE):
        """
        Blocks until one datagram is received or the deadline fires.

        Returns a tuple of (nbytes, (host, port)) for a datagram, or None
        once the deadline has fired. A fired deadline always takes priority
        over a datagram waiting in the socket buffer.
        """
        try:
            self._wait_readable(deadline)
        except DeadlineInterruption:
            return None

        data, (host, port) = self.sock.recvfrom(bufsize)
        return len(data), (host, port)

    def _wait_readable(self, deadline):
        while True:
            deadline.check()
            readable, _, _ = select.select([self.sock, deadline], [], [])
            deadline.check()
            if self.sock in readable:
                return

    def close(self):
        """Releases the socket. Calling it again does nothing."""
        if self.sock is not None:
            self.sock.close()
            self.sock = None
