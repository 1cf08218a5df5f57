import os
import time

from .icmp import MalformedPacket, build_echo_request, parse_icmp
from .logger import logger
from .outcome import Failed, Measured, TimedOut
from .sockets import ReadTimeout, Socket

MAX_DGRAM = 1500


class Pinger:
    """Sends ICMP echo requests to one host and waits for the matching reply.

    Probes are strictly sequential: the identifier is fixed for the
    lifetime of the pinger and the sequence counter is only advanced by
    ``probe``. Allowing overlapping probes would require an atomic
    counter and a receive loop that matches against every outstanding
    sequence number.
    """

    def __init__(
        self, target, transport=None, identifier=None, clock=time.monotonic
    ):
        """Open the transport and resolve the target.

        Args:
            target (str): Hostname or IPv4 address to probe.
            transport: Object providing resolve/sendto/set_read_deadline/
                recvfrom/close. A raw ICMP ``Socket`` is opened if omitted.
            identifier (int): ICMP identifier; defaults to the process id.
            clock: Monotonic time source shared with the transport deadline.

        Raises:
            ValueError: If the target is empty or cannot be resolved.
            PermissionError: If the raw socket cannot be opened.
        """
        self.target = _validate_target(target)
        self.transport = (
            transport if transport is not None else Socket(clock=clock)
        )
        try:
            self.address = self.transport.resolve(self.target)
        except Exception:
            self.transport.close()
            raise

        if identifier is None:
            identifier = os.getpid()
        self.identifier = identifier & 0xFFFF
        self.seq_num = 1
        self.clock = clock
        self.closed = False

    def probe(self, timeout: float):
        """Run one echo request/reply exchange bounded by ``timeout`` seconds.

        Returns ``Measured``, ``TimedOut`` or ``Failed``; never raises for
        transport errors.
        """
        seq = self.seq_num
        self.seq_num = (seq + 1) & 0xFFFF

        packet = build_echo_request(self.identifier, seq)

        start = self.clock()
        try:
            self.transport.sendto(packet, self.address)
        except OSError as e:
            return Failed(e)
        logger.vprint(
            f"-> Sent echo request [ID={self.identifier}, SEQ={seq}] to {self.address}"
        )

        deadline = start + timeout
        self.transport.set_read_deadline(deadline)

        while True:
            if self.clock() >= deadline:
                return TimedOut()
            try:
                data, addr = self.transport.recvfrom(MAX_DGRAM)
            except ReadTimeout:
                return TimedOut()
            except OSError as e:
                return Failed(e)

            received_at = self.clock()
            if received_at >= deadline:
                # Too late, even if it is our reply
                return TimedOut()

            try:
                reply = parse_icmp(data)
            except MalformedPacket as e:
                logger.vprint(f"<- Discarding packet from {addr}: {e}")
                continue

            if not reply.is_echo_reply():
                logger.vprint(
                    f"<- Ignoring ICMP type={reply.type} code={reply.code} from {addr}"
                )
                continue

            if reply.identifier != self.identifier or reply.sequence != seq:
                logger.vprint(
                    f"<- Ignoring echo reply [ID={reply.identifier}, SEQ={reply.sequence}] "
                    f"(expected: [ID={self.identifier}, SEQ={seq}])"
                )
                continue

            return Measured(received_at - start)

    def current_sequence(self) -> int:
        """Sequence number the next probe will use."""
        return self.seq_num

    def close(self):
        if not self.closed:
            self.transport.close()
            self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _validate_target(target):
    if not isinstance(target, str) or not target.strip():
        raise ValueError("Target is empty or not a string.")
    return target.strip()
