"""Simple CLI entrypoint for hnefatafl."""
import argparse
import logging

from . import __version__
from .board import Board
from .config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def main(argv=None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="hnefatafl")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--board", action="store_true", help="Print the starting position")
    parser.add_argument("--serve", action="store_true", help="Run FastAPI server")
    parser.add_argument("--host", default=settings.host, help="Server host")
    parser.add_argument("--port", type=int, default=settings.port, help="Server port")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level}).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)

    if args.version:
        print(__version__)
        return 0

    if args.serve:
        try:
            from uvicorn import run
            from hnefatafl.api import create_app
        except ImportError:
            print("uvicorn and fastapi are required to serve the API. Install extras.")
            return 1

        run(create_app(settings), host=args.host, port=args.port, reload=False)
        return 0

    if args.board:
        print(Board.standard())
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
