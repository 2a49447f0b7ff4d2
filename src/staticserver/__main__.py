"""
=============================================================================
STATIC FILE SERVER CLI ENTRY POINT
=============================================================================

    # Run with defaults (0.0.0.0:8080, document root ./www)
    python -m staticserver

    # Custom port and document root
    python -m staticserver --port 3000 --root ./public

    # Localhost only, verbose
    python -m staticserver --host 127.0.0.1 --log-level DEBUG

Environment variables (see ServerConfig.from_env) are read first; any
flag given on the command line overrides them.

=============================================================================
"""

import argparse
import sys
from typing import Optional, Sequence

from . import __version__
from .config import ServerConfig, LOG_LEVELS
from .server import StaticFileServer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="staticserver",
        description="Minimal static file HTTP server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m staticserver                        # Run with defaults
  python -m staticserver --port 3000            # Custom port
  python -m staticserver --root ./public        # Custom document root
  python -m staticserver --host 127.0.0.1       # Localhost only
        """,
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: 0.0.0.0)",
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: 8080)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--root", "-r",
        dest="document_root",
        default=None,
        help="Document root directory (default: ./www)",
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"staticserver {__version__}",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)

    try:
        config = ServerConfig.from_env()
        for name in ("host", "port", "document_root", "log_level"):
            value = getattr(args, name)
            if value is not None:
                setattr(config, name, value)

        server = StaticFileServer(config)
        server.run()
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
