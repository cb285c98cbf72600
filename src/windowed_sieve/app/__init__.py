from .cli import apply_cli_overrides, build_pacing, build_parser, cleanup_outputs, parse_args, run

# app package exports CLI helpers for reuse in tests and entrypoints.
__all__ = ["apply_cli_overrides", "build_pacing", "build_parser", "cleanup_outputs", "parse_args", "run"]
