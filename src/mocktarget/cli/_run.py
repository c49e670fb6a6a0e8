"""``mocktarget run``: start the development or production server."""

import argparse
import sys

from mocktarget.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it.

    Production mode (``--production``, or ``debug`` off in the app's
    config) runs pounce with the configured worker count. Otherwise a
    single reloading dev worker is started.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    host = args.host or app.config.host
    port = args.port or app.config.port

    if args.production or not app.config.debug:
        from mocktarget.server.production import run_production_server

        run_production_server(
            app,
            host=host,
            port=port,
            workers=args.workers if args.workers is not None else app.config.workers,
            lifecycle_logging=app.config.lifecycle_logging,
            log_format=app.config.log_format,
            log_level=app.config.log_level,
            max_connections=app.config.max_connections,
            backlog=app.config.backlog,
            keep_alive_timeout=app.config.keep_alive_timeout,
            request_timeout=app.config.request_timeout,
        )
    else:
        from mocktarget.server.dev import run_dev_server

        run_dev_server(
            app,
            host,
            port,
            reload=True,
            app_path=args.app,
            log_level=app.config.log_level,
        )
