import argparse
import os
from pathlib import Path

import uvicorn


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Study Desk server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Path to the catalog JSON with exams and flashcard decks",
    )
    parser.add_argument("--log-level", default="info")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if args.catalog is not None:
        os.environ["CATALOG_PATH"] = str(args.catalog.resolve())
    os.environ.setdefault("LOG_LEVEL", args.log_level.upper())

    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
