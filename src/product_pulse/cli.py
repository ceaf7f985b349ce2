"""CLI entry point for product-pulse."""

import argparse
import sys

from product_pulse.exceptions import ConfigurationError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="product-pulse",
        description="Pulse dashboard for your private GitHub repositories.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the relay HTTP service")
    serve.add_argument("--host", help="Listen address (default: $HOST or 127.0.0.1)")
    serve.add_argument("--port", type=int, help="Listen port (default: $PORT or 3000)")

    dashboard = sub.add_parser("dashboard", help="Open the terminal dashboard")
    dashboard.add_argument("--relay-url", help="Relay base URL (default: $PULSE_RELAY_URL)")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Load .env, configure logging and run the chosen component."""
    from dotenv import load_dotenv

    load_dotenv()  # Load .env file (e.g. GITHUB_TOKEN, PORT)

    from product_pulse.config import load_settings, parse_port
    from product_pulse.log import configure_logging

    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
        if args.command == "serve" and args.port is not None:
            settings = settings.model_copy(update={"port": parse_port(str(args.port))})
    except ConfigurationError as e:
        parser.error(e.message)
        return

    if args.command == "serve":
        configure_logging(settings.log_level)
        if args.host:
            settings = settings.model_copy(update={"host": args.host})

        from product_pulse.server import serve

        serve(settings)
    else:
        from textual.logging import TextualHandler

        # Stream output would corrupt the terminal UI.
        configure_logging(settings.log_level, handler=TextualHandler())
        if args.relay_url:
            settings = settings.model_copy(update={"relay_url": args.relay_url.rstrip("/")})

        from product_pulse.app import PulseDashboardApp

        PulseDashboardApp(settings).run()


if __name__ == "__main__":
    main(sys.argv[1:])
