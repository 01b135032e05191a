"""Tests for countdown.cli module."""

from datetime import timedelta
from unittest.mock import patch

import pytest

from countdown.cli import main, parse_args, run_timer
from countdown.config import TimerConfig
from countdown.errors import TerminalInitError, UsageError
from countdown.terminal import Key, TerminalEvent

# ─── parse_args ────────────────────────────────────────────────────


class TestParseArgs:
    def test_duration_only(self):
        config = parse_args(["25s"])
        assert config == TimerConfig(duration=timedelta(seconds=25), count_up=False, title="")

    def test_count_up_flag(self):
        config = parse_args(["1m50s", "-up"])
        assert config.count_up is True
        assert config.title == ""

    def test_title_without_flag(self):
        config = parse_args(["1m50s", "Tea"])
        assert config.count_up is False
        assert config.title == "Tea"

    def test_flag_and_title(self):
        config = parse_args(["2h45m50s", "-up", "Deep work"])
        assert config.duration == timedelta(hours=2, minutes=45, seconds=50)
        assert config.count_up is True
        assert config.title == "Deep work"

    def test_third_argument_is_title_even_without_flag(self):
        config = parse_args(["10s", "Tea", "Break"])
        assert config.count_up is False
        assert config.title == "Break"

    def test_flag_only_recognised_second(self):
        config = parse_args(["10s", "Tea", "-up"])
        assert config.count_up is False
        assert config.title == "-up"

    def test_negative_duration_accepted(self):
        assert parse_args(["-5s"]).duration == timedelta(seconds=-5)

    @pytest.mark.parametrize("argv", [[], ["1s", "-up", "t", "extra"]])
    def test_wrong_arity(self, argv):
        with pytest.raises(UsageError) as exc_info:
            parse_args(argv)
        assert exc_info.value.show_usage is True
        assert exc_info.value.exit_code == 2

    def test_invalid_duration(self):
        with pytest.raises(UsageError, match="invalid duration: 5x") as exc_info:
            parse_args(["5x"])
        assert exc_info.value.exit_code == 2


# ─── main ──────────────────────────────────────────────────────────


class TestMain:
    def test_invalid_duration_exits_2_without_terminal(self, capsys):
        with patch("countdown.cli.TerminalScreen") as screen_cls:
            assert main(["5x"]) == 2
        screen_cls.assert_not_called()
        assert "invalid duration: 5x" in capsys.readouterr().err

    def test_out_of_range_duration_exits_2(self, capsys):
        with patch("countdown.cli.TerminalScreen") as screen_cls:
            assert main(["30000000000h"]) == 2
        screen_cls.assert_not_called()
        assert "invalid duration: 30000000000h" in capsys.readouterr().err

    def test_wrong_arity_prints_usage(self, capsys):
        with patch("countdown.cli.TerminalScreen") as screen_cls:
            assert main([]) == 2
        screen_cls.assert_not_called()
        err = capsys.readouterr().err
        assert "usage:" in err
        assert "countdown 1m50s [-up] [title]" in err

    def test_valid_args_run_timer(self):
        with patch("countdown.cli.run_timer", return_value=0) as run:
            assert main(["25s", "-up", "Tea"]) == 0
        run.assert_called_once_with(TimerConfig(timedelta(seconds=25), True, "Tea"))


# ─── run_timer ─────────────────────────────────────────────────────


class TestRunTimer:
    def test_escape_quits_with_1_and_releases_terminal(self, make_terminal):
        terminal = make_terminal(inputs=[TerminalEvent.special(Key.ESC)])
        code = run_timer(TimerConfig(timedelta(hours=1)), terminal)
        assert code == 1
        assert terminal.init_calls == 1
        assert terminal.closed

    def test_ctrl_c_after_pause_quits_with_1(self, make_terminal):
        terminal = make_terminal(
            inputs=[TerminalEvent.char("p"), TerminalEvent.special(Key.CTRL_C)]
        )
        assert run_timer(TimerConfig(timedelta(hours=1)), terminal) == 1
        assert terminal.closed

    def test_zero_duration_finishes_with_0(self, make_terminal):
        terminal = make_terminal()
        assert run_timer(TimerConfig(timedelta(0)), terminal) == 0
        assert terminal.closed
        assert len(terminal.frames) >= 1

    def test_terminal_init_failure(self, make_terminal, capsys):
        terminal = make_terminal(fail_init=TerminalInitError("stdin is not a terminal"))
        assert run_timer(TimerConfig(timedelta(seconds=5)), terminal) == 1
        assert not terminal.frames
        assert "stdin is not a terminal" in capsys.readouterr().err

    def test_keyboard_interrupt_returns_1(self, terminal):
        with patch("countdown.cli.Session.run", side_effect=KeyboardInterrupt):
            assert run_timer(TimerConfig(timedelta(seconds=5)), terminal) == 1
