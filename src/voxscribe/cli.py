"""CLI entrypoint for voxscribe."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from voxscribe.config import load_config
from voxscribe.core import run_transcription
from voxscribe.io import to_json, write_json
from voxscribe.logging_config import configure_logging
from voxscribe.models import TranscriptionRequest
from voxscribe.status import NullStatusSink, StreamStatusSink


def build_parser() -> argparse.ArgumentParser:
    """Create the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="voxscribe",
        description="Transcribe audio files with an external whisper CLI.",
    )
    subparsers = parser.add_subparsers(dest="command")

    transcribe = subparsers.add_parser("transcribe", help="Transcribe an audio file to .txt")
    transcribe.add_argument("audio_path", help="Path to input audio file")
    transcribe.add_argument(
        "--bin",
        dest="transcriber_binary_path",
        default=None,
        help="Path to the whisper CLI binary (default: whisper / whisper-cli on PATH)",
    )
    transcribe.add_argument(
        "--model",
        dest="model_path",
        default=None,
        help="Model file passed with -m (e.g. ggml-base.en.bin)",
    )
    transcribe.add_argument("--language", default=None, help="Language code passed with -l")
    transcribe.add_argument(
        "--no-timestamps",
        action="store_true",
        help="Ask whisper to omit timestamps",
    )
    transcribe.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the job result JSON to this path. If omitted, prints to stdout.",
    )
    transcribe.add_argument(
        "--quiet",
        action="store_true",
        help="Do not stream progress output to stderr",
    )

    serve = subparsers.add_parser("serve", help="Run the voxscribe HTTP API")
    serve.add_argument("--host", default=None, help="Override API host")
    serve.add_argument("--port", type=int, default=None, help="Override API port")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = load_config()
        configure_logging(config.log_level)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    if args.command == "transcribe":
        try:
            request = TranscriptionRequest(
                audio_path=args.audio_path,
                transcriber_binary_path=args.transcriber_binary_path,
                model_path=args.model_path,
                language=args.language,
                no_timestamps=args.no_timestamps,
            )
        except ValidationError as exc:
            print(f"Invalid request: {exc}", file=sys.stderr)
            return 2
        status = NullStatusSink() if args.quiet else StreamStatusSink()
        result = run_transcription(request, status=status, config=config)
        if args.output:
            write_json(result, args.output)
            print(f"Wrote job result JSON to {args.output}")
        else:
            print(to_json(result))
        if not result.ok:
            print(f"ERROR: {result.error}", file=sys.stderr)
            return 1
        if result.note:
            print(f"NOTE: {result.note}", file=sys.stderr)
        return 0

    if args.command == "serve":
        try:
            import uvicorn
        except ModuleNotFoundError:
            print(
                "`voxscribe serve` requires uvicorn. Install project dependencies first.",
                file=sys.stderr,
            )
            return 1

        host = args.host or config.api_host
        port = args.port or config.api_port
        uvicorn.run(
            "voxscribe.api:app",
            host=host,
            port=port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            reload=False,
        )
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
