# gamebreaker/server/__main__.py
"""Entry point: python -m gamebreaker.server"""

from __future__ import annotations

import argparse
from pathlib import Path

import uvicorn

from .config import settings


def main() -> None:
    parser = argparse.ArgumentParser(description="GameBreaker Telemetry Server")
    parser.add_argument("--host", type=str, default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument(
        "--gamelog",
        type=Path,
        default=settings.GAMELOG_PATH,
        help="Path to the game log served by /api/episodes",
    )
    args = parser.parse_args()

    from . import create_app

    app = create_app(gamelog_path=args.gamelog)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
