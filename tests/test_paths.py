"""Tests for sess_core.paths: home directory and logging setup."""

import logging
import os
from unittest.mock import patch

from sess_core import paths


class TestSessHome:
    def test_env_override(self, tmp_path):
        with patch.dict(os.environ, {"SESS_HOME": str(tmp_path / "h")}):
            assert paths.sess_home() == tmp_path / "h"
            assert (tmp_path / "h").is_dir()
            assert paths.command_log_file() == tmp_path / "h" / "debug" / "sess.log"


class TestDebugEnabled:
    def test_env_var(self, tmp_path):
        with patch.dict(os.environ, {"SESS_HOME": str(tmp_path), "SESS_DEBUG": "1"}):
            assert paths.debug_enabled() is True

    def test_zero_is_off(self, tmp_path):
        with patch.dict(os.environ, {"SESS_HOME": str(tmp_path), "SESS_DEBUG": "0"}):
            assert paths.debug_enabled() is False

    def test_marker_file(self, tmp_path):
        with patch.dict(os.environ, {"SESS_HOME": str(tmp_path), "SESS_DEBUG": ""}):
            (tmp_path / "debug-enabled").touch()
            assert paths.debug_enabled() is True
            (tmp_path / "debug-enabled").unlink()
            assert paths.debug_enabled() is False


class TestConfigureLogger:
    def test_single_handler(self, tmp_path):
        with patch.dict(os.environ, {"SESS_HOME": str(tmp_path)}):
            log = paths.configure_logger("sess.test-single")
            again = paths.configure_logger("sess.test-single")
        assert log is again
        assert len(log.handlers) == 1
        assert log.propagate is False

    def test_debug_level(self, tmp_path):
        with patch.dict(os.environ, {"SESS_HOME": str(tmp_path), "SESS_DEBUG": "1"}):
            log = paths.configure_logger("sess.test-debug")
        assert log.level == logging.DEBUG

    def test_shell_commands_logged(self, tmp_path):
        logger = logging.getLogger("sess.shell")
        saved = logger.handlers[:]
        logger.handlers.clear()
        try:
            with patch.dict(os.environ, {"SESS_HOME": str(tmp_path), "SESS_DEBUG": ""}):
                paths.log_shell_command(["tmux", "list-sessions"], prefix="tmux")
                paths.log_shell_command(["tmux", "kill-session"], prefix="tmux", returncode=1)
            for h in logger.handlers:
                h.flush()
            text = (tmp_path / "debug" / "sess.log").read_text()
            assert "tmux: tmux list-sessions" in text
            assert "tmux failed (rc=1): tmux kill-session" in text
        finally:
            for h in logger.handlers:
                h.close()
            logger.handlers[:] = saved
