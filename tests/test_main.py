"""
Tests for command-line argument parsing. No audio stream is opened.
"""

import pytest

try:
    from fretboard.main import parse_args
except OSError:  # PortAudio shared library missing
    pytest.skip("PortAudio is not available", allow_module_level=True)


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_args([])
        assert args.sensitivity == 50
        assert args.log_level == "WARNING"
        assert args.strings == [1, 2, 3, 4, 5, 6]

    def test_log_level_is_case_insensitive(self) -> None:
        assert parse_args(["--log-level", "debug"]).log_level == "DEBUG"

    def test_unknown_log_level_is_a_usage_error(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc:
            parse_args(["--log-level", "LOUD"])
        assert exc.value.code == 2
        assert "invalid choice" in capsys.readouterr().err

    def test_max_errors_must_be_positive(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["--max-errors", "0"])
