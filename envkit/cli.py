"""
envkit CLI Entry Point.

Loads dotenv files and expands, prints or runs commands with the result.
"""

import argparse
import logging
import os
import subprocess
import sys

from envkit.config import EnvkitConfig
from envkit.environment import Environment
from envkit.errors import EnvError
from envkit.loader import load, override, read_expanded

logger = logging.getLogger(__name__)


def setup_logging(level_name: str | None = None, env: Environment | None = None):
    """Configure root logging for the command line"""
    if level_name:
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    else:
        level = EnvkitConfig.log_level(env)

    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def load_files(files: list[str] | None, use_override: bool, env: Environment):
    """Apply dotenv files to env (default files when none are given)"""
    paths = files or []
    if use_override:
        override(*paths, env=env)
    else:
        load(*paths, env=env)


def cmd_expand(args, env: Environment) -> int:
    """Print the expansion of a template"""
    load_files(args.file, args.override, env)
    print(env.expand(args.template))
    return 0


def cmd_get(args, env: Environment) -> int:
    """Print a single variable"""
    load_files(args.file, args.override, env)

    value = env.lookup(args.key)
    if value is None:
        if args.default is None:
            print(f"{args.key} is not set", file=sys.stderr)
            return 1
        value = args.default

    print(value)
    return 0


def cmd_list(args, env: Environment) -> int:
    """Print the expanded KEY=value pairs of the files"""
    for key, value in read_expanded(*(args.file or []), env=env).items():
        print(f"{key}={value}")
    return 0


def cmd_run(args, env: Environment) -> int:
    """Run a command with the files loaded into its environment"""
    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]

    if not command:
        print("Error: no command given", file=sys.stderr)
        return 1

    load_files(args.file, args.override, env)

    logger.info(f"Running: {' '.join(command)}")
    try:
        result = subprocess.run(command, env=env.snapshot())
    except FileNotFoundError:
        print(f"Error: command not found: {command[0]}", file=sys.stderr)
        return 127

    return result.returncode


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envkit",
        description="envkit - dotenv loading and ${VAR|default} expansion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  envkit get DB_HOST                       # Value after loading .env
  envkit -f prod.env expand '${DB_HOST|localhost}:${DB_PORT|5432}'
  envkit list                              # Expanded pairs from .env
  envkit -f .env -f local.env run -- python app.py
        """,
    )

    parser.add_argument(
        "-f",
        "--file",
        action="append",
        help="Dotenv file to load (repeatable, default: $ENVKIT_FILES or .env)",
    )
    parser.add_argument("--override", action="store_true", help="Replace variables that are already set")
    parser.add_argument("--log-level", type=str, help="Log level (default: $ENVKIT_LOG_LEVEL or WARNING)")

    subparsers = parser.add_subparsers(dest="subcommand", help="Subcommands")

    expand_parser = subparsers.add_parser("expand", help="Expand ${...} placeholders in a template")
    expand_parser.add_argument("template", help="Template string")
    expand_parser.set_defaults(handler=cmd_expand)

    get_parser = subparsers.add_parser("get", help="Print the value of a variable")
    get_parser.add_argument("key", help="Variable name")
    get_parser.add_argument("--default", type=str, help="Value to print if the variable is not set")
    get_parser.set_defaults(handler=cmd_get)

    list_parser = subparsers.add_parser("list", help="Print expanded KEY=value pairs from the files")
    list_parser.set_defaults(handler=cmd_list)

    run_parser = subparsers.add_parser("run", help="Run a command with the files loaded")
    run_parser.add_argument("command", nargs=argparse.REMAINDER, help="Command and arguments")
    run_parser.set_defaults(handler=cmd_run)

    return parser


def main(argv: list[str] | None = None, env: Environment | None = None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Work on a copy so commands never leak into the calling process
    if env is None:
        env = Environment(dict(os.environ))

    setup_logging(args.log_level, env)

    if not args.subcommand:
        parser.print_help()
        return 1

    try:
        return args.handler(args, env)
    except (EnvError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
