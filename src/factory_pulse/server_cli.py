"""CLI entry point for the Factory Pulse API server."""

import argparse
import os


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="factory-pulse-server",
        description="Factory Pulse API server — manufacturing RFQ and project workflow tracking",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8080, help="Bind port (default: 8080)")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Local dev mode: SQLite database, console logs",
    )
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args(argv)

    if args.local:
        os.environ["FACTORY_PULSE_LOCAL_MODE"] = "1"

    import uvicorn

    uvicorn.run("factory_pulse.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
