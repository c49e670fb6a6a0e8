"""mocktarget CLI: serve the mock endpoints or list them.

Entry point registered as ``mocktarget`` in ``pyproject.toml``::

    [project.scripts]
    mocktarget = "mocktarget.cli:main"
"""

import argparse
import sys

DEFAULT_APP = "mocktarget.endpoints:create_app"


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``mocktarget`` command."""
    parser = argparse.ArgumentParser(
        prog="mocktarget",
        description="Mock HTTP server simulating monitoring targets for Uptime Kuma.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- mocktarget run ---------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the mock server")
    run_parser.add_argument(
        "app",
        nargs="?",
        default=DEFAULT_APP,
        help=f"Import string (default: {DEFAULT_APP})",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--production",
        action="store_true",
        help="Run in production mode (multi-worker, no reload)",
    )
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect, production only)",
    )

    # -- mocktarget routes ------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the served endpoints")
    routes_parser.add_argument(
        "app",
        nargs="?",
        default=DEFAULT_APP,
        help=f"Import string (default: {DEFAULT_APP})",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from mocktarget.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from mocktarget.cli._routes import run_routes

        run_routes(args)
