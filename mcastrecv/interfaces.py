import socket

from pyroute2 import IPRoute
from pyroute2.netlink.exceptions import NetlinkError

from .errors import ConfigurationError, SetupError

INADDR_ANY = "0.0.0.0"


def _addr_of(msg):
    """Local address of an ifaddrmsg, as getifaddrs(3) reports it."""
    return msg.get_attr("IFA_LOCAL") or msg.get_attr("IFA_ADDRESS")


def resolve_interface(if_name):
    """
    Maps an interface name to the IPv4 address multicast membership should
    be added on.

    An empty name means "any interface" and returns INADDR_ANY without
    touching the interface table. Otherwise the first IPv4 address whose
    interface label matches the name exactly is returned.
    """
    if not if_name:
        return INADDR_ANY

    try:
        ip = IPRoute()
    except (NetlinkError, OSError) as e:
        raise SetupError("getifaddrs", e)

    try:
        addresses = list(ip.get_addr(family=socket.AF_INET))
    except (NetlinkError, OSError) as e:
        raise SetupError("getifaddrs", e)
    finally:
        ip.close()

    for msg in addresses:
        if msg.get_attr("IFA_LABEL") != if_name:
            continue
        address = _addr_of(msg)
        if address:
            return address

    raise ConfigurationError(
        f"{if_name}: interface does not exist or has no IPv4 address"
    )
