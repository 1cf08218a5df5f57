import struct

# --- ICMP message types ---
ICMP_ECHO_REPLY = 0
ICMP_ECHO_REQUEST = 8

# Header format:
# ! -> Network Byte Order (big-endian)
# B -> Unsigned Char (1 byte) for type
# B -> Unsigned Char (1 byte) for code
# H -> Unsigned Short (2 bytes) for checksum
# H -> Unsigned Short (2 bytes) for identifier
# H -> Unsigned Short (2 bytes) for sequence number
HEADER_FORMAT = "!BBHHH"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)

PAYLOAD = b"RTO-PING"

IPV4_VERSION = 4
IPV4_MIN_HEADER_SIZE = 20


class MalformedPacket(ValueError):
    """Inbound bytes that cannot be decoded as a valid ICMP message."""


class IcmpMessage:
    __slots__ = ("type", "code", "checksum", "identifier", "sequence", "payload")

    def __init__(self, type_, code, checksum, identifier, sequence, payload=b""):
        self.type = type_
        self.code = code
        self.checksum = checksum
        self.identifier = identifier
        self.sequence = sequence
        self.payload = payload

    def is_echo_reply(self) -> bool:
        return self.type == ICMP_ECHO_REPLY and self.code == 0

    def __repr__(self):
        return (
            f"IcmpMessage(type={self.type}, code={self.code}, "
            f"id={self.identifier}, seq={self.sequence}, len={len(self.payload)})"
        )


def checksum(data: bytes) -> int:
    """Compute the Internet checksum (RFC 1071) over *data*.

    16-bit big-endian words are added with end-around carry and the
    ones' complement of the sum is returned. An odd trailing byte is
    padded with zero.
    """
    if len(data) % 2:
        data += b"\x00"

    total = 0
    for i in range(0, len(data), 2):
        total += (data[i] << 8) + data[i + 1]

    # Fold carries into 16 bits
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)

    return ~total & 0xFFFF


def verify_checksum(data: bytes) -> bool:
    """True when *data*, checksum field included, sums to all ones."""
    return checksum(data) == 0


def build_echo_request(identifier: int, sequence: int, payload=PAYLOAD) -> bytes:
    identifier &= 0xFFFF
    sequence &= 0xFFFF
    header = struct.pack(
        HEADER_FORMAT, ICMP_ECHO_REQUEST, 0, 0, identifier, sequence
    )
    csum = checksum(header + payload)
    header = struct.pack(
        HEADER_FORMAT, ICMP_ECHO_REQUEST, 0, csum, identifier, sequence
    )
    return header + payload


def parse_icmp(packet: bytes) -> IcmpMessage:
    """Decode an ICMP message, stripping a leading IPv4 header if present.

    Raw ICMP sockets on Linux hand back the whole IP datagram, while
    other platforms (and tests) may deliver the bare ICMP message.

    Raises:
        MalformedPacket: if the bytes are truncated or fail the checksum.
    """
    packet = _strip_ipv4_header(bytes(packet))
    if len(packet) < HEADER_SIZE:
        raise MalformedPacket(
            f"ICMP message too short ({len(packet)} bytes)"
        )
    if not verify_checksum(packet):
        raise MalformedPacket("ICMP checksum mismatch")

    type_, code, csum, identifier, sequence = struct.unpack(
        HEADER_FORMAT, packet[:HEADER_SIZE]
    )
    return IcmpMessage(
        type_, code, csum, identifier, sequence, packet[HEADER_SIZE:]
    )


def _strip_ipv4_header(packet):
    # A bare ICMP message never starts with 0x4_: echo reply is type 0
    # and no ICMP type in 64..79 is assigned.
    if not packet or packet[0] >> 4 != IPV4_VERSION:
        return packet
    ihl = (packet[0] & 0x0F) * 4
    if ihl < IPV4_MIN_HEADER_SIZE or len(packet) < ihl:
        raise MalformedPacket(f"Invalid IPv4 header length: {ihl}")
    return packet[ihl:]
