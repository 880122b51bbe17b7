"""Thin CLI entry point: serves the web UI or exports a transcript file."""

import argparse
import json
import logging
import sys
from pathlib import Path

from voicescribe.config import load_settings
from voicescribe.exporters import SUPPORTED_FORMATS, export_filename, export_transcript
from voicescribe.models import transcript_from_dict


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="voicescribe",
        description="VoiceScribe: record or upload audio, transcribe it, export subtitles.",
    )
    parser.add_argument("--config", "-c", type=Path, help="Path to a JSON settings file")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Launch the web UI")
    serve.add_argument("--port", type=int, default=8321, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")

    exp = sub.add_parser("export", help="Export a transcript JSON file")
    exp.add_argument("transcript", type=Path, help="Transcript JSON file")
    exp.add_argument("--format", "-f", choices=SUPPORTED_FORMATS, default="text", help="Export format")
    exp.add_argument("--output", "-o", type=Path, help="Output file path (default: stdout)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    settings = load_settings(args.config)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        from voicescribe.web import create_app
        app = create_app(settings)
        print(f"VoiceScribe web UI: http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=False)
        return

    try:
        transcript = transcript_from_dict(json.loads(args.transcript.read_text(encoding="utf-8")))
    except (OSError, ValueError) as e:
        print(f"Error: cannot load {args.transcript}: {e}", file=sys.stderr)
        sys.exit(1)

    result = export_transcript(transcript, args.format)

    if args.output is None:
        sys.stdout.buffer.write(result.content.encode("utf-8"))
        sys.stdout.flush()
        return

    output = args.output
    if output.is_dir():
        output = output / export_filename(transcript.id or args.transcript.stem, result.extension)
    output.write_text(result.content, encoding="utf-8", newline="")
    print(f"Wrote {output} ({result.content_type})")
