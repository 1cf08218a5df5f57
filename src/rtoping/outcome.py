class ProbeOutcome:
    """Result of a single echo request/reply exchange."""

    __slots__ = ()

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self), self._key()))

    def _key(self):
        return ()


class Measured(ProbeOutcome):
    """A matching echo reply arrived after ``rtt`` seconds."""

    __slots__ = ("rtt",)

    def __init__(self, rtt: float):
        self.rtt = rtt

    def _key(self):
        return (self.rtt,)

    def __repr__(self):
        return f"Measured(rtt={self.rtt!r})"


class TimedOut(ProbeOutcome):
    """No matching reply arrived before the deadline."""

    __slots__ = ()

    def __repr__(self):
        return "TimedOut()"


class Failed(ProbeOutcome):
    """The transport failed while sending or receiving."""

    __slots__ = ("error",)

    def __init__(self, error: Exception):
        self.error = error

    def _key(self):
        return (self.error,)

    def __repr__(self):
        return f"Failed(error={self.error!r})"
