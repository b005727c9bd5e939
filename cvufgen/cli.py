"""CLI entrypoints for cvufgen commands."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict

from .config import ConfigError, load_config
from .errors import GenerationError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .cvufgen.yml (defaults to $CVUFGEN_CONFIG or the working directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cvufgen",
        description="Generate CVUF microapp documents from intake questionnaires.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write detailed logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP generation service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="0.0.0.0", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    generate_parser = subparsers.add_parser(
        "generate",
        help="Run the full pipeline against a JSON intake file.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_config_option(generate_parser)
    generate_parser.add_argument("intake", type=Path, help="Path to the intake JSON file.")
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the response JSON here instead of stdout.",
    )

    preview_parser = subparsers.add_parser(
        "preview",
        help="Show the normalized request, warnings, estimate and prompt without calling the model.",
    )
    _add_verbose_option(preview_parser, suppress_default=True)
    _add_config_option(preview_parser)
    preview_parser.add_argument("intake", type=Path, help="Path to the intake JSON file.")

    return parser


def _read_intake(parser: argparse.ArgumentParser, path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        parser.exit(1, f"Intake file not found: {path}\n")
    except json.JSONDecodeError as exc:
        parser.exit(1, f"Intake file is not valid JSON: {exc}\n")
    if not isinstance(data, dict):
        parser.exit(1, "Intake file must contain a JSON object\n")
    return data


def _build_orchestrator(parser: argparse.ArgumentParser, config_path: Path | None) -> Orchestrator:
    try:
        return Orchestrator(load_config(config_path))
    except (ConfigError, ValueError) as exc:
        parser.exit(1, f"{exc}\n")


async def _generate(orchestrator: Orchestrator, payload: Dict[str, Any]) -> Dict[str, Any]:
    try:
        result = await orchestrator.generate(payload)
    finally:
        await orchestrator.drain()
    return result.to_response()


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for cvufgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "serve":
        from .service import run_service

        run_service(args.host, args.port, verbose=bool(args.verbose), log_file=args.log_file)
    elif args.command == "generate":
        payload = _read_intake(parser, args.intake)
        orchestrator = _build_orchestrator(parser, args.config)
        try:
            response = asyncio.run(_generate(orchestrator, payload))
        except GenerationError as exc:
            parser.exit(1, f"cvufgen generate failed: {exc}\nRun with --verbose for more details.\n")
        rendered = json.dumps(response, indent=2, ensure_ascii=False)
        if args.output is not None:
            args.output.write_text(rendered + "\n", encoding="utf-8")
            print(f"Generated {response['_meta']['requestId']} -> {args.output}")
        else:
            print(rendered)
    elif args.command == "preview":
        payload = _read_intake(parser, args.intake)
        orchestrator = _build_orchestrator(parser, args.config)
        preview = orchestrator.preview(payload)
        print(json.dumps(preview.to_dict(), indent=2, ensure_ascii=False))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
