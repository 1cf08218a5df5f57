# RFC 6298 parameters
MIN_RTO = 1.0
MAX_RTO = 60.0
ALPHA = 1 / 8
BETA = 1 / 4
K = 4


class RTOEstimator:
    def __init__(self):
        # State
        self.srtt = None
        self.rttvar = None
        self.rto = MIN_RTO  # initial value per RFC: 1 second
        self.has_sample = False

    def note_sample(self, rtt_sample: float):
        """Update the estimator with a measured RTT (in seconds)."""
        if not self.has_sample:
            # First RTT
            self.srtt = rtt_sample
            self.rttvar = rtt_sample / 2
            self.has_sample = True
        else:
            # RTTVAR must be computed against the previous SRTT
            self.rttvar = (1 - BETA) * self.rttvar + BETA * abs(
                self.srtt - rtt_sample
            )
            self.srtt = (1 - ALPHA) * self.srtt + ALPHA * rtt_sample

        self.rto = _clamp(self.srtt + K * self.rttvar)

    def get_timeout(self) -> float:
        """Return the current RTO (in seconds)."""
        return self.rto

    def backoff(self):
        """Exponential backoff when a timeout expires."""
        self.rto = _clamp(self.rto * 2)


def _clamp(rto):
    return min(max(rto, MIN_RTO), MAX_RTO)
