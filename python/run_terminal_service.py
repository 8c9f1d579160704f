#!/usr/bin/env python3
"""
Launch a terminal service instance for a specific engine spec + instance id.
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path

import uvicorn


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run a SwitchUp terminal service instance for a specific engine spec.",
    )
    parser.add_argument("--instance", default="default", help="Instance id (e.g. booth-a).")
    parser.add_argument("--host", default="0.0.0.0", help="Service bind host.")
    parser.add_argument("--port", type=int, default=8770, help="Service bind port.")
    parser.add_argument(
        "--engine-spec",
        default=str(Path(__file__).parent / "switchup_platform" / "specs" / "switchup.json"),
        help="Path to engine spec JSON (default: the bundled switchup.json).",
    )
    parser.add_argument(
        "--flags-file",
        default=None,
        help="Persist the shutdown flag and visit tally to this JSON file. Default: in-memory.",
    )
    parser.add_argument(
        "--transcript-file",
        default=None,
        help="Append terminal transcript entries to this file.",
    )
    parser.add_argument("--log-level", default="info", help="Uvicorn log level.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    os.environ["INSTANCE_ID"] = args.instance
    os.environ["SERVICE_HOST"] = args.host
    os.environ["SERVICE_PORT"] = str(args.port)
    os.environ["ENGINE_SPEC_PATH"] = str(Path(args.engine_spec).expanduser())
    if args.flags_file:
        os.environ["FLAGS_FILE"] = str(Path(args.flags_file).expanduser())
    if args.transcript_file:
        os.environ["TRANSCRIPT_FILE"] = str(Path(args.transcript_file).expanduser())

    from terminal_service import ENGINE_SPEC, app  # Import after env config

    print(
        f"Starting SwitchUp terminal engine={ENGINE_SPEC.engine_id} instance={args.instance} "
        f"bind=http://{args.host}:{args.port} "
        f"engine_spec={os.environ['ENGINE_SPEC_PATH']}"
    )
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
