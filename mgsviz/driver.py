"""Animation driver: orthonormalize a fixed vector set and stream every step.

Usage:
    python -m mgsviz --host gateway --port 8000

The driver waits for the receiving side to come up, then loops forever (or
for --cycles cycles): compute the Gram-Schmidt history of the default vector
set, send each snapshot as one datagram with a short pause in between, and
pause again before starting over.
"""

import argparse
import time
import warnings

import torch

from .orthonormalize import compute_history, is_orthonormal
from .transport import UDPSink, DEFAULT_HOST, DEFAULT_PORT

STARTUP_DELAY = 3.0
STEP_DELAY = 0.5
CYCLE_DELAY = 3.0


def default_vectors():
    """Return a fresh copy of the animated vector set.

    Returns:
        torch.tensor of shape (3, 3), dtype float32
    """
    return torch.tensor(
        [
            [2.0, 1.0, 0.0],
            [1.0, 2.0, 0.0],
            [1.0, 1.0, 1.5],
        ],
        dtype=torch.float32,
    )


def run(
    sink,
    cycles=None,
    step_delay=STEP_DELAY,
    cycle_delay=CYCLE_DELAY,
    vectors_fn=default_vectors,
    sleep=time.sleep,
    verbose=False,
):
    """Stream Gram-Schmidt histories to a sink.

    Args:
        sink: object with a send(snapshot) method, e.g. UDPSink
        cycles: int or None, number of animation cycles; None loops forever
        step_delay: float, seconds to wait after each snapshot (default: 0.5)
        cycle_delay: float, seconds to wait after each cycle (default: 3.0)
        vectors_fn: callable returning a new vector set per cycle
        sleep: callable taking seconds, used for all pauses
        verbose: bool, print progress

    Returns:
        int, total number of snapshots sent
    """
    n_sent = 0
    cycle = 0

    while cycles is None or cycle < cycles:
        vecs = vectors_fn()
        history = compute_history(vecs)

        if not is_orthonormal(vecs):
            warnings.warn(
                f"Cycle {cycle}: final vector set is not orthonormal; "
                f"some input vectors were linearly dependent and left unnormalized.",
                RuntimeWarning,
            )

        for step, snapshot in enumerate(history):
            sink.send(snapshot)
            n_sent += 1
            if verbose:
                print(f"Cycle {cycle} step {step + 1}/{len(history)} sent")
            sleep(step_delay)

        sleep(cycle_delay)
        cycle += 1

    return n_sent


def build_parser():
    """Build the command-line parser for the driver.

    Returns:
        argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="mgsviz",
        description="Stream Modified Gram-Schmidt steps over UDP for visualization.",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help=f"receiver host (default: {DEFAULT_HOST})")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"receiver UDP port (default: {DEFAULT_PORT})")
    parser.add_argument(
        "--startup-delay",
        type=float,
        default=STARTUP_DELAY,
        help=f"seconds to wait for the receiver before sending (default: {STARTUP_DELAY})",
    )
    parser.add_argument(
        "--step-delay", type=float, default=STEP_DELAY, help=f"seconds between snapshots (default: {STEP_DELAY})"
    )
    parser.add_argument(
        "--cycle-delay", type=float, default=CYCLE_DELAY, help=f"seconds between cycles (default: {CYCLE_DELAY})"
    )
    parser.add_argument("--cycles", type=int, default=None, help="number of cycles (default: run forever)")
    parser.add_argument("-v", "--verbose", action="store_true", help="print every sent step")
    return parser


def main(argv=None, sleep=time.sleep):
    """Run the driver from the command line.

    Args:
        argv: list of str, arguments to parse (default: sys.argv[1:])
        sleep: callable taking seconds, used for all pauses

    Returns:
        int, process exit status
    """
    args = build_parser().parse_args(argv)

    print(f"Simulation started. Waiting {args.startup_delay:g} seconds for the receiver to be ready...")
    sleep(args.startup_delay)

    with UDPSink(args.host, args.port) as sink:
        print(f"Sending Gram-Schmidt steps to {args.host}:{args.port} via UDP")
        n_sent = run(
            sink,
            cycles=args.cycles,
            step_delay=args.step_delay,
            cycle_delay=args.cycle_delay,
            sleep=sleep,
            verbose=args.verbose,
        )

    print(f"Sent {n_sent} snapshots")
    return 0
