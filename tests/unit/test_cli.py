"""
Unit tests for backend/cli.py
"""
import json

import pytest
from unittest.mock import MagicMock, patch

from application.exceptions import StoreReadError
from backend.cli import build_parser, main
from backend.settings import Settings

pytestmark = pytest.mark.unit


@pytest.fixture
def settings():
    return Settings(
        environment="test",
        supabase_url=None,
        supabase_service_role_key=None,
        supabase_anon_key=None,
        _env_file=None,
    )


class TestParser:
    def test_reps_arguments(self):
        args = build_parser().parse_args(["reps", "17", "-5"])
        assert (args.command, args.exercise_id, args.value) == ("reps", "17", "-5")

    def test_close_skip_flag(self):
        assert build_parser().parse_args(["close", "--skip"]).skip is True
        assert build_parser().parse_args(["close"]).skip is False

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    def test_remind_prints_report(self, settings, capsys):
        reminders = MagicMock()
        reminders.execute.return_value.to_dict.return_value = {"ok": True, "reminded": 2}

        with patch("backend.cli.get_settings", return_value=settings), \
                patch("backend.cli._reminders", return_value=reminders):
            main(["remind"])

        assert json.loads(capsys.readouterr().out) == {"ok": True, "reminded": 2}

    def test_store_error_exits_nonzero(self, settings, capsys):
        reminders = MagicMock()
        reminders.execute.side_effect = StoreReadError("user_state: timeout")

        with patch("backend.cli.get_settings", return_value=settings), \
                patch("backend.cli._reminders", return_value=reminders):
            with pytest.raises(SystemExit) as exc_info:
                main(["remind"])

        assert exc_info.value.code == 1
        assert "user_state: timeout" in capsys.readouterr().err

    def test_missing_supabase_config(self, settings):
        with patch("backend.cli.get_settings", return_value=settings):
            with pytest.raises(SystemExit, match="SUPABASE_URL"):
                main(["remind"])
