"""
Tests for the envkit command line.

Run with: uv run pytest tests/test_cli.py
"""

import os
import sys

from envkit.cli import build_parser, main
from envkit.environment import Environment


class TestParser:
    """Test argument parsing"""

    def test_repeatable_files(self):
        args = build_parser().parse_args(["-f", "a.env", "-f", "b.env", "--override", "get", "KEY"])
        assert args.file == ["a.env", "b.env"]
        assert args.override is True
        assert args.key == "KEY"

    def test_no_subcommand_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out


class TestCommands:
    """Test subcommands against an isolated Environment"""

    def test_expand(self, write_env_file, capsys):
        path = write_env_file(".env", "HOST=db\n")
        env = Environment({})

        exit_code = main(["-f", str(path), "expand", "${HOST|localhost}:${PORT|5432}"], env=env)

        assert exit_code == 0
        assert capsys.readouterr().out == "db:5432\n"

    def test_get(self, write_env_file, capsys):
        path = write_env_file(".env", "KEY=from-file\n")

        assert main(["-f", str(path), "get", "KEY"], env=Environment({})) == 0
        assert capsys.readouterr().out == "from-file\n"

    def test_get_respects_existing_without_override(self, write_env_file, capsys):
        path = write_env_file(".env", "KEY=from-file\n")

        main(["-f", str(path), "get", "KEY"], env=Environment({"KEY": "existing"}))
        assert capsys.readouterr().out == "existing\n"

        main(["-f", str(path), "--override", "get", "KEY"], env=Environment({"KEY": "existing"}))
        assert capsys.readouterr().out == "from-file\n"

    def test_get_missing(self, write_env_file, capsys):
        path = write_env_file(".env", "")

        assert main(["-f", str(path), "get", "NOPE"], env=Environment({})) == 1
        assert "NOPE is not set" in capsys.readouterr().err

        assert main(["-f", str(path), "get", "NOPE", "--default", "fallback"], env=Environment({})) == 0
        assert capsys.readouterr().out == "fallback\n"

    def test_list(self, write_env_file, capsys):
        path = write_env_file(".env", "A=1\nB=${A}/${C|c}\n")
        env = Environment({})

        assert main(["-f", str(path), "list"], env=env) == 0
        assert capsys.readouterr().out == "A=1\nB=1/c\n"
        assert env.snapshot() == {}

    def test_parse_error(self, write_env_file, capsys):
        path = write_env_file("broken.env", 'A="unterminated\n')

        assert main(["-f", str(path), "get", "A"], env=Environment({})) == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        missing = tmp_path / "missing.env"

        assert main(["-f", str(missing), "get", "A"], env=Environment({})) == 1
        assert "Error:" in capsys.readouterr().err

    def test_does_not_modify_process_environment(self, write_env_file):
        path = write_env_file(".env", "ENVKIT_CLI_ONLY=1\n")

        main(["-f", str(path), "get", "ENVKIT_CLI_ONLY"])

        assert "ENVKIT_CLI_ONLY" not in os.environ

    def test_run(self, write_env_file):
        path = write_env_file(".env", "EXIT_CODE=3\n")
        command = [sys.executable, "-c", "import os, sys; sys.exit(int(os.environ['EXIT_CODE']))"]

        assert main(["-f", str(path), "--override", "run", "--", *command], env=Environment(dict(os.environ))) == 3

    def test_run_without_command(self, write_env_file, capsys):
        path = write_env_file(".env", "")

        assert main(["-f", str(path), "run"], env=Environment({})) == 1
        assert "no command" in capsys.readouterr().err
