import argparse
import sys

from .config import default_settings
from .deadline import Deadline
from .errors import ConfigurationError, McastRecvError
from .group_socket import GroupSocket, MembershipRequest, parse_group
from .interfaces import resolve_interface
from .receiver import receive_loop, report
from .validation import ConfigValidator

USAGE = "%(prog)s [-i interface] [-q] [-t timeout] [mcast-group [service]]"


class UsageArgumentParser(argparse.ArgumentParser):
    """Prints the one-line usage and exits 1 on any command line error."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1)


def make_parser():
    parser = UsageArgumentParser(
        prog="mcastrecv",
        usage=USAGE,
        description="Join an IPv4 multicast group and count the datagrams received.",
    )
    parser.add_argument(
        "-i", dest="interface", metavar="interface",
        help="Join the group on this interface's IPv4 address (default: any)",
    )
    parser.add_argument(
        "-q", dest="quiet", action="store_true", default=None,
        help="Do not print a line per received packet",
    )
    parser.add_argument(
        "-t", dest="timeout", metavar="timeout", type=int,
        help="Stop after this many seconds, 0-3600 (default: 0, wait for ^C)",
    )
    parser.add_argument("group", nargs="?", metavar="mcast-group")
    parser.add_argument("service", nargs="?")
    return parser


def build_config(args):
    """
    Lays the command line over the built-in defaults and validates the
    result into a Configuration.
    """
    settings = default_settings()
    for key in ("interface", "quiet", "timeout", "group", "service"):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value

    config, error_message = ConfigValidator().validate(settings)
    if error_message:
        raise ConfigurationError(error_message)
    return config


def run(config, out=None):
    """
    Runs one receive session: joins the group, receives until the timeout
    or an interrupt, then prints the totals. Returns the ReceiveStats.
    """
    # The group literal is checked before the interface table is read.
    group = parse_group(config.group)
    membership = MembershipRequest(
        group=group, interface=resolve_interface(config.interface)
    )
    gsock = GroupSocket.open(membership, config.service)

    try:
        with Deadline() as deadline:
            deadline.arm(config.timeout)
            stats = receive_loop(gsock, deadline, quiet=config.quiet, out=out)
        report(stats, gsock, out=out)
    finally:
        gsock.close()

    return stats


def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
        run(config)
    except McastRecvError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
