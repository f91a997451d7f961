"""
Runs the receiver as a separate process, the way an operator would.
"""

import os
import signal
import socket
import subprocess
import sys
import time

import pytest

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
GROUP = "239.255.77.77"


def free_udp_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind(("", 0))
        return sock.getsockname()[1]
    finally:
        sock.close()


def start_receiver(args):
    cmd = [sys.executable, "-m", "mcastrecv.cli"] + args
    return subprocess.Popen(
        cmd,
        cwd=REPO_ROOT,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )


def run_receiver(args, timeout=15):
    proc = start_receiver(args)
    stdout, stderr = proc.communicate(timeout=timeout)
    return proc.returncode, stdout, stderr


def skip_without_multicast(returncode, stderr):
    if returncode == 1 and ("add-membership" in stderr or "bind" in stderr):
        pytest.skip(f"Host cannot join multicast groups: {stderr.strip()}")


def test_timeout_limit_rejected():
    returncode, stdout, stderr = run_receiver(["-t", "3601"])

    assert returncode == 1
    assert stdout == ""
    assert "3601: invalid timeout (>3600)" in stderr


def test_bad_flag_prints_usage():
    returncode, _, stderr = run_receiver(["-z"])

    assert returncode == 1
    assert stderr.startswith("usage: mcastrecv")


def test_invalid_group_rejected():
    returncode, stdout, stderr = run_receiver(["not-an-ip"])

    assert returncode == 1
    assert stdout == ""
    assert "not-an-ip: invalid multicast group" in stderr


def test_timeout_session():
    port = free_udp_port()
    started = time.monotonic()

    returncode, stdout, stderr = run_receiver(["-t", "1", GROUP, str(port)])
    skip_without_multicast(returncode, stderr)

    assert returncode == 0
    assert time.monotonic() - started < 10
    assert stdout == "\n0 packets (0 byte) received.\n"


def test_interrupted_session():
    port = free_udp_port()
    proc = start_receiver([GROUP, str(port)])
    # The receiver announces the join on stderr right before it starts waiting.
    first_line = proc.stderr.readline()
    if not first_line.startswith("[INFO] Joined"):
        _, stderr = proc.communicate()
        skip_without_multicast(proc.returncode, first_line + stderr)
    time.sleep(0.5)

    proc.send_signal(signal.SIGINT)
    stdout, _ = proc.communicate(timeout=10)

    assert proc.returncode == 0
    assert stdout.endswith("received.\n")

