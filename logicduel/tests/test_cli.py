"""
Tests for configuration, the CLI and terminal rendering.
"""

import io
import logging

import pytest

from ..api.service import GameService
from ..cli import _config_from_args, build_parser, cmd_play, cmd_puzzle, describe_outcome, main
from ..config import GameConfig
from ..session.game_session import GameSession
from ..utils.logger import PACKAGE_LOGGER, configure_logging, get_logger, parse_level
from ..utils.pretty import format_grid, format_status
from .conftest import KNOWN_SOLUTION, StubRandom, make_puzzle


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LOGICDUEL_SEED", "LOGICDUEL_HOLES", "LOGICDUEL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


class TestGameConfig:
    """Tests for environment configuration."""

    def test_defaults(self):
        config = GameConfig.from_env({})
        assert config.seed is None
        assert config.grid.holes == 18
        assert config.grid.shape().size == 6
        assert config.combat.enemy_max_hp == 200
        assert config.starting_relics == ("goldbach",)
        assert config.log_level == logging.WARNING

    def test_overrides(self):
        config = GameConfig.from_env({
            "LOGICDUEL_SEED": "42",
            "LOGICDUEL_HOLES": "10",
            "LOGICDUEL_LOG_LEVEL": "debug",
        })
        assert config.seed == 42
        assert config.grid.holes == 10
        assert config.log_level == logging.DEBUG

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("LOGICDUEL_SEED", "7")
        assert GameConfig.from_env().seed == 7

    def test_unknown_log_level(self):
        with pytest.raises(ValueError):
            GameConfig.from_env({"LOGICDUEL_LOG_LEVEL": "chatty"})


class TestParser:
    """Tests for argument handling."""

    def test_args_override_config(self):
        args = build_parser().parse_args(["play", "--seed", "9", "--holes", "12", "--euler"])
        config = _config_from_args(args)
        assert config.seed == 9
        assert config.grid.holes == 12
        assert config.starting_relics == ("goldbach", "euler")

    def test_log_level_case_insensitive(self):
        args = build_parser().parse_args(["--log-level", "debug", "puzzle"])
        assert args.log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, capsys):
        """A bad --log-level is an argument error, like a bad LOGICDUEL_LOG_LEVEL."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--log-level", "NOPE", "puzzle", "--seed", "1"])
        assert exc_info.value.code == 2
        assert "--log-level" in capsys.readouterr().err

    def test_no_command_exits(self, capsys):
        with pytest.raises(SystemExit):
            main([])


class TestPuzzleCommand:
    """Tests for `logicduel puzzle`."""

    def test_prints_puzzle_and_solution(self):
        args = build_parser().parse_args(["puzzle", "--seed", "3", "--solution"])
        stream = io.StringIO()
        cmd_puzzle(args, _config_from_args(args), stream=stream)

        output = stream.getvalue()
        assert output.startswith("Puzzle:")
        assert "Solution:" in output
        assert output.count(".") == 18

    def test_main_puzzle(self, capsys):
        main(["puzzle", "--seed", "3", "--holes", "0"])
        output = capsys.readouterr().out
        assert "Puzzle:" in output
        assert "Solution:" not in output


class TestPlayCommand:
    """Tests for `logicduel play`."""

    def run(self, commands, *argv):
        args = build_parser().parse_args(["play", "--seed", "11", *argv])
        stream = io.StringIO()
        cmd_play(args, _config_from_args(args), stdin=io.StringIO(commands), stream=stream)
        return stream.getvalue()

    def test_commands(self):
        output = self.run("u\nxyz\nh 0 0\n0 0 9\n\nq\n")
        assert "Player  HP 100/100" in output
        assert "Nothing to undo." in output
        assert "Unknown command." in output
        assert "Candidates: (no hints)" in output
        assert "Error: Digit must be in 1..6" in output

    def test_restart(self):
        output = self.run("r\nq\n")
        assert "New puzzle." in output

    def test_euler_hints(self):
        output = self.run("h 0 0\nh 0 1\nq\n", "--euler")
        assert "Relics  Goldbach's Kiss, Euler's Eye" in output
        assert "Candidates:" in output


class TestDescribeOutcome:
    """Tests for outcome messages."""

    def box_response(self, num):
        service = GameService()
        created = service.create_session(config=GameConfig(seed=2))
        managed = service.session_manager.get_session(created.session_id)
        holes = [(0, 0), (0, 3), (2, 0), (3, 3), (3, 4), (4, 3)]
        managed.game = GameSession.from_puzzle(make_puzzle(holes), rng=StubRandom(0.99))
        return service.apply_move(created.session_id, 0, 0, num)

    def test_applied(self):
        messages = describe_outcome(self.box_response(1))
        assert messages == [
            "+1 shield",
            "box chain! 42 damage (combo 1) enemy frozen!",
            "The enemy is frozen.",
        ]

    def test_invalid(self):
        messages = describe_outcome(self.box_response(2))
        assert messages == ["Invalid placement! You take 6 damage."]


class TestPretty:
    """Tests for terminal rendering."""

    def test_format_grid(self):
        puzzle = make_puzzle([(0, 0)])
        text = format_grid(puzzle.puzzle, fixed=puzzle.fixed_cells)
        lines = text.splitlines()
        assert "|" in lines[2]
        assert "[2]" in lines[2]
        assert " . " in lines[2]
        # Box separator after every second row
        assert lines[4].strip().startswith("-")

    def test_format_grid_without_fixed(self):
        text = format_grid(KNOWN_SOLUTION)
        assert "[" not in text

    def test_format_status(self):
        session = GameSession.from_puzzle(make_puzzle([(0, 0)]))
        text = format_status(session.get_state())
        assert "Player  HP 100/100" in text
        assert "Enemy   HP 200/200" in text
        assert "Combo   0" in text


class TestLogging:
    """Tests for logger setup."""

    def test_get_logger_installs_no_handlers(self):
        """Fetching loggers leaves the root logger as the host configured it."""
        root_handlers = list(logging.getLogger().handlers)
        logger = get_logger("logicduel.grid.generator")
        assert logger.name == "logicduel.grid.generator"
        assert logging.getLogger().handlers == root_handlers
        assert get_logger().name == PACKAGE_LOGGER

    def test_configure_logging_formats_package_records(self):
        stream = io.StringIO()
        configure_logging(logging.INFO, stream=stream)
        get_logger("logicduel.session").info("fight started")
        get_logger("logicduel.session").debug("hidden")

        output = stream.getvalue()
        assert "| INFO    | logicduel.session | fight started" in output
        assert "hidden" not in output

    def test_configure_logging_replaces_handler(self):
        root_handlers = list(logging.getLogger().handlers)
        first = configure_logging(logging.INFO, stream=io.StringIO())
        second = configure_logging(logging.DEBUG, stream=io.StringIO())

        package_handlers = logging.getLogger(PACKAGE_LOGGER).handlers
        assert second in package_handlers
        assert first not in package_handlers
        assert logging.getLogger().handlers == root_handlers

    @pytest.mark.parametrize("name,level", [("debug", logging.DEBUG), ("Warning", logging.WARNING)])
    def test_parse_level(self, name, level):
        assert parse_level(name) == level

    def test_parse_level_rejects_unknown(self):
        with pytest.raises(ValueError):
            parse_level("NOPE")
