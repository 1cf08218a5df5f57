import struct

import pytest

from rtoping.icmp import HEADER_FORMAT, ICMP_ECHO_REPLY, checksum
from rtoping.logger import logger
from rtoping.sockets import ReadTimeout

TARGET_ADDR = "192.0.2.10"


def make_icmp(type_, identifier, sequence, payload=b"RTO-PING", code=0):
    header = struct.pack(HEADER_FORMAT, type_, code, 0, identifier, sequence)
    csum = checksum(header + payload)
    header = struct.pack(HEADER_FORMAT, type_, code, csum, identifier, sequence)
    return header + payload


def make_reply(identifier, sequence, payload=b"RTO-PING"):
    return make_icmp(ICMP_ECHO_REPLY, identifier, sequence, payload)


def with_ipv4_header(icmp):
    # Minimal IPv4 header (IHL=5); its contents are not inspected
    return bytes([0x45]) + bytes(19) + icmp


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeTransport:
    """Scripted transport.

    ``inbound`` holds ``(delay, data)`` pairs or exceptions. Each read
    advances the clock by ``delay`` before handing back ``data``. When
    the script runs dry the read waits until the deadline.
    """

    def __init__(self, clock, inbound=(), send_error=None, resolve_error=None):
        self.clock = clock
        self.inbound = list(inbound)
        self.send_error = send_error
        self.resolve_error = resolve_error
        self.sent = []
        self.deadlines = []
        self.closed = False

    def resolve(self, target):
        if self.resolve_error is not None:
            raise self.resolve_error
        return TARGET_ADDR

    def sendto(self, data, address):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((bytes(data), address))
        return len(data)

    def set_read_deadline(self, deadline):
        self.deadlines.append(deadline)

    def recvfrom(self, bufsize):
        if not self.inbound:
            self.clock.now = max(self.clock.now, self.deadlines[-1])
            raise ReadTimeout("Read deadline exceeded")
        event = self.inbound.pop(0)
        if isinstance(event, BaseException):
            raise event
        delay, data = event
        self.clock.advance(delay)
        return data, (TARGET_ADDR, 0)

    def close(self):
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def plain_logger():
    verbose, quiet = logger.verbose, logger.quiet
    logger.set_verbose(False)
    logger.set_quiet(False)
    yield logger
    logger.set_verbose(verbose)
    logger.set_quiet(quiet)
