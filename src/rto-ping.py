import argparse
import sys

from rtoping.driver import run
from rtoping.logger import logger

if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        prog="rto-ping.py",
        description="ICMP ping with an RFC 6298 adaptive timeout",
        epilog="Requires root privileges to open a raw socket",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="increase output verbosity",
    )
    group.add_argument(
        "-q", "--quiet", action="store_true", help="decrease output verbosity"
    )
    parser.add_argument(
        "-t", "--target", type=str, default="8.8.8.8", help="target address"
    )
    args = parser.parse_args()

    logger.set_verbose(args.verbose)
    logger.set_quiet(args.quiet)

    try:
        run(args.target)
    except (PermissionError, ValueError, OSError) as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("\nPing stopped.")
        sys.exit(130)
