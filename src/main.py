"""
main.py — Application entry point for the cube scramble/replay service
=======================================================================

Two sub-commands:
 - `serve`: starts the HTTP endpoint (`/solve`, `/health`) on a background
   Werkzeug server and blocks until SIGINT/SIGTERM.
 - `solve`: runs one scramble/replay session in-process and prints the same
   JSON body `/solve` would return (or a net diagram with `--net`).
   Exit code 0 when the final cube is solved, 1 otherwise.

Debug logging is explicitly opt-in (`--debug`).

------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import signal
import sys
from typing import Optional, Sequence

from api import _Server, create_app
from config import DEFAULT_RANDOM_SCRAMBLE_LENGTH, SERVER_HOST, SERVER_PORT
from cube_moves import apply_sequence, random_scramble, tokenize
from cube_state import CubeState
from scramble_session import run_scramble

# if --debug is used.
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger("main")


def create_arg_parser() -> argparse.ArgumentParser:
    """
    Build and return the CLI argument parser.
    """
    p = argparse.ArgumentParser(
        description="Rubik's cube scramble/replay service",
        allow_abbrev=False,
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging.")
    sub = p.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP endpoint.")
    serve.add_argument("--host", default=SERVER_HOST, help="Interface to bind.")
    serve.add_argument("--port", type=int, default=SERVER_PORT, help="Port to listen on.")

    solve = sub.add_parser("solve", help="Scramble, replay the inverse and print the result.")
    solve.add_argument("scramble", nargs="?", default=None, help="Space-separated move tokens, e.g. \"U R U'\".")
    solve.add_argument(
        "--random", type=int, metavar="N", nargs="?", const=DEFAULT_RANDOM_SCRAMBLE_LENGTH, default=None,
        help=f"Use a random scramble of N moves (default {DEFAULT_RANDOM_SCRAMBLE_LENGTH})."
    )
    solve.add_argument("--seed", type=int, default=None, help="Seed for --random.")
    solve.add_argument("--net", action="store_true", help="Print face diagrams instead of JSON.")

    return p


def _install_signal_handlers(shutdown_callable):
    """
    Install safe signal handlers for SIGINT & SIGTERM.

    When triggered, the handler:
      - Logs the event
      - Calls the provided shutdown function
      - Exits cleanly using SystemExit
    """
    def _handler(signum, frame):
        logger.info("Received signal %s, initiating shutdown...", signum)
        try:
            shutdown_callable()
        except Exception as e:
            logger.exception("Error during shutdown handler: %s", e)
        raise SystemExit(0)

    for sig_name in ("SIGINT", "SIGTERM"):
        if hasattr(signal, sig_name):
            signal.signal(getattr(signal, sig_name), _handler)


def run_server(host: str, port: int) -> int:
    try:
        server = _Server(create_app(), host, port)
    except OSError as e:
        logger.error("Cannot bind %s:%s: %s", host, port, e)
        return 1

    _install_signal_handlers(server.shutdown)
    server.start()
    logger.info("Server running at http://%s:%s/solve?scramble=U%%20R%%20U'", host, server.port)
    try:
        while server.is_alive():
            server.join(0.5)
    except SystemExit:
        logger.info("Shutdown requested (SystemExit).")
    return 0


def run_solve(args, parser: argparse.ArgumentParser) -> int:
    if args.random is not None and args.scramble is not None:
        parser.error("give either a scramble or --random, not both")
    if args.random is not None:
        if args.random < 0:
            parser.error("--random must be >= 0")
        tokens = random_scramble(args.random, random.Random(args.seed))
    else:
        tokens = tokenize(args.scramble)

    ok, result = run_scramble(tokens)
    if not ok:
        logger.error("Session failed: %s", result)
        return 1

    if args.net:
        scrambled = CubeState()
        apply_sequence(scrambled, tokens)
        print("Scramble:", " ".join(tokens) or "(empty)")
        print(scrambled.net_text())
        print()
        print("Replayed:", " ".join(result.moves) or "(none)")
        print(CubeState.from_snapshot(result.states[-1]).net_text())
        for m in result.mismatches:
            print(m.describe())
    else:
        print(json.dumps(result.to_dict()))
    return 0 if result.final_solved else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point.

    Supports direct CLI invocation or programmatic use via:
        main(["solve", "U R U'"])

    Returns integer exit code.
    """
    parser = create_arg_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled.")

    if args.command == "serve":
        return run_server(args.host, args.port)
    return run_solve(args, parser)


if __name__ == "__main__":
    sys.exit(main())
