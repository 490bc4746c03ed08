"""Entry point: ``python -m delve``.

Supports two modes:
  - ``python -m delve generate``  → Generate one level and print it as ASCII
  - ``python -m delve serve``     → Launch the FastAPI level inspection server
"""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)

EXIT_INSUFFICIENT_SPACE = 2
EXIT_GENERATION_FAILED = 1


def _add_generation_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--seed", type=str, default=None, help="Seed string (random when omitted)")
    parser.add_argument("--width", type=int, default=80)
    parser.add_argument("--height", type=int, default=40)
    parser.add_argument("--rooms", type=int, default=8)
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Roguelike dungeon level generator")
    sub = parser.add_subparsers(dest="command")

    # --- One-shot generation ---
    gen = sub.add_parser("generate", help="Generate a level and print it (default)")
    _add_generation_args(gen)
    gen.add_argument("--confirm", action="store_true", help="Wait for Enter once generation is done")

    # --- Inspection server ---
    srv = sub.add_parser("serve", help="Start the FastAPI level inspection server")
    _add_generation_args(srv)
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)

    return parser


def _config_from_args(args: argparse.Namespace):
    from delve.config import GenerationConfig

    return GenerationConfig(
        seed=args.seed,
        map_width=args.width,
        map_height=args.height,
        room_count=args.rooms,
        log_level=args.log_level,
    )


def _run_generate(args: argparse.Namespace) -> int:
    from delve.core.errors import GenerationError, InsufficientSpaceError
    from delve.engine.map_generation import MapGeneration, MapGenerator, ProgressGauge
    from delve.utils.logging import setup_logging

    config = _config_from_args(args)
    setup_logging(config.log_level)

    try:
        generator = MapGenerator(config)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_GENERATION_FAILED

    confirm = (lambda: input("Generation complete, press Enter to continue...")) if args.confirm else None
    generation = MapGeneration(generator, config.channel_capacity)
    try:
        level_map = generation.generate_level(ProgressGauge(confirm))
    except InsufficientSpaceError as exc:
        logger.error("%s (seed %r); try a bigger map or fewer rooms", exc, generator.seed)
        return EXIT_INSUFFICIENT_SPACE
    except GenerationError as exc:
        logger.error("Generation failed for seed %r: %s", generator.seed, exc)
        return EXIT_GENERATION_FAILED

    print(level_map.to_ascii())
    print(f"seed: {level_map.seed}")
    return 0


def _run_server(args: argparse.Namespace) -> int:
    import uvicorn

    from delve.api.app import create_app

    config = _config_from_args(args)
    try:
        config.validate()
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_GENERATION_FAILED

    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Default to generate mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["generate"])

    if args.command == "serve":
        return _run_server(args)
    return _run_generate(args)


if __name__ == "__main__":
    sys.exit(main())
