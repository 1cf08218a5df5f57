import time

from .logger import logger
from .outcome import Failed, Measured, TimedOut
from .pinger import Pinger
from .rto_estimator import RTOEstimator

PROBE_COUNT = 10
PROBE_INTERVAL = 1.0


def run(
    target,
    count=PROBE_COUNT,
    interval=PROBE_INTERVAL,
    pinger=None,
    estimator=None,
    sleep=time.sleep,
):
    """Probe ``target`` ``count`` times, feeding each outcome to the estimator.

    Construction errors of the pinger (permissions, name resolution)
    propagate to the caller. Per-probe failures are logged and skipped.

    Returns:
        list: The outcome of every probe, in order.
    """
    if estimator is None:
        estimator = RTOEstimator()
    if pinger is None:
        pinger = Pinger(target)

    outcomes = []
    with pinger:
        logger.info(
            f"Pinging {pinger.target} ({pinger.address}) with RFC 6298 RTO logic."
        )
        logger.info("---------------------------------------------------")

        for _ in range(count):
            timeout = estimator.get_timeout()
            seq = pinger.current_sequence()
            logger.info(
                f"[Seq {seq}] Sending... (Timeout limit: {_fmt(timeout)}) ",
                end="",
            )

            outcome = pinger.probe(timeout)
            outcomes.append(outcome)

            if isinstance(outcome, Measured):
                logger.info(f"-> Reply! RTT: {_fmt(outcome.rtt)}")
                estimator.note_sample(outcome.rtt)
                logger.info(
                    f"   [RFC6298] Updated. SRTT: {_fmt(estimator.srtt)}, "
                    f"RTTVAR: {_fmt(estimator.rttvar)} -> Next RTO: {_fmt(estimator.rto)}"
                )
            elif isinstance(outcome, TimedOut):
                logger.info("-> TIMEOUT!")
                estimator.backoff()
                logger.info(
                    f"   [RFC6298] Backing off. New RTO: {_fmt(estimator.rto)}"
                )
            elif isinstance(outcome, Failed):
                # Estimator untouched
                logger.info(f"\nError: {outcome.error}")

            sleep(interval)

    _print_summary(pinger.target, outcomes)
    return outcomes


def _print_summary(target, outcomes):
    rtts = [o.rtt for o in outcomes if isinstance(o, Measured)]
    sent = len(outcomes)
    loss = (sent - len(rtts)) / sent * 100 if sent else 0.0

    logger.info(f"\n--- {target} ping statistics ---")
    logger.info(
        f"{sent} probes transmitted, {len(rtts)} received, {loss:.0f}% packet loss"
    )
    if rtts:
        avg = sum(rtts) / len(rtts)
        logger.info(
            f"rtt min/avg/max = {_fmt(min(rtts))}/{_fmt(avg)}/{_fmt(max(rtts))}"
        )


def _fmt(seconds):
    if seconds >= 1:
        return f"{seconds:.3f}s"
    return f"{seconds * 1000:.3f}ms"
