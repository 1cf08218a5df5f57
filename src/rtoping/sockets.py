import socket
import time


class ReadTimeout(TimeoutError):
    """The read deadline passed before a datagram arrived."""


class Socket:
    """Raw IPv4 ICMP endpoint with deadline-bounded reads."""

    def __init__(self, clock=time.monotonic):
        try:
            self.socket = socket.socket(
                socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP
            )
        except PermissionError:
            raise PermissionError(
                "Opening a raw ICMP socket requires root privileges."
            )
        self.clock = clock
        self.deadline = None

    @staticmethod
    def resolve(target: str) -> str:
        try:
            return socket.gethostbyname(target)
        except socket.gaierror as e:
            raise ValueError(f"Cannot resolve {target!r}: {e}")

    def sendto(self, data: bytes, address: str) -> int:
        # Port is meaningless for raw ICMP
        return self.socket.sendto(data, (address, 0))

    def set_read_deadline(self, deadline):
        """Bound subsequent reads by an absolute time on ``self.clock``."""
        self.deadline = deadline

    def recvfrom(self, bufsize: int):
        if self.deadline is None:
            self.socket.settimeout(None)
        else:
            remaining = self.deadline - self.clock()
            if remaining <= 0:
                raise ReadTimeout("Read deadline exceeded")
            self.socket.settimeout(remaining)
        try:
            return self.socket.recvfrom(bufsize)
        except socket.timeout:
            raise ReadTimeout("Read deadline exceeded")

    def close(self):
        if self.socket.fileno() != -1:
            self.socket.close()
