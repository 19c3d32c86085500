"""Tests for sess_core.picker: fzf selection."""

from unittest.mock import patch, MagicMock

import pytest

from sess_core.candidates import Candidate, Origin, from_sessions
from sess_core.picker import (
    PickerError,
    build_fzf_cmd,
    fuzzy_match,
    pick,
)


def _cands():
    return [
        Candidate("alpha", "/p/alpha", Origin.PROJECT_DIRECTORY),
        Candidate("beta", "/p/beta", Origin.PROJECT_DIRECTORY),
        Candidate("scratch", "", Origin.LIVE_SESSION),
    ]


class TestFuzzyMatch:
    def test_subsequence(self):
        assert fuzzy_match("alp", "alpha")
        assert fuzzy_match("aph", "alpha")
        assert not fuzzy_match("pla", "alpha")

    def test_smart_case(self):
        assert fuzzy_match("work", "Work")
        assert not fuzzy_match("Work", "work")


class TestBuildFzfCmd:
    def test_shows_name_column_only(self):
        cmd = build_fzf_cmd()
        assert "--delimiter=\t" in cmd
        assert "--with-nth=2" in cmd

    def test_auto_select(self):
        assert "--select-1" in build_fzf_cmd(auto_select=True)
        assert "--select-1" not in build_fzf_cmd(auto_select=False)

    def test_multi(self):
        cmd = build_fzf_cmd(multi=True, auto_select=False)
        assert "--multi" in cmd
        assert "--select-1" not in cmd

    def test_query(self):
        cmd = build_fzf_cmd("wo")
        assert cmd[cmd.index("-q") + 1] == "wo"


class TestPick:
    @patch("sess_core.picker.subprocess.run")
    def test_no_candidates_is_empty(self, mock_run):
        assert pick([], "x") == []
        mock_run.assert_not_called()

    @patch("sess_core.picker.subprocess.run")
    def test_single_match_auto_selected(self, mock_run):
        cands = _cands()
        assert pick(cands, "beta") == [cands[1]]
        mock_run.assert_not_called()

    @patch("sess_core.picker.subprocess.run")
    def test_singleton_exact_match(self, mock_run):
        cands = from_sessions(["work"])
        assert pick(cands, "work") == cands
        mock_run.assert_not_called()

    @patch("sess_core.picker.subprocess.run")
    def test_ambiguous_query_runs_fzf(self, mock_run):
        cands = _cands()
        mock_run.return_value = MagicMock(returncode=0, stdout="/p/alpha\talpha\n")
        # "a" matches alpha, beta and scratch
        assert pick(cands, "a") == [cands[0]]
        cmd = mock_run.call_args[0][0]
        assert cmd[0] == "fzf"
        assert "--select-1" in cmd
        fed = mock_run.call_args[1]["input"]
        assert "/p/alpha\talpha" in fed
        assert "\tscratch" in fed

    @patch("sess_core.picker.subprocess.run")
    def test_no_auto_select_runs_fzf(self, mock_run):
        cands = _cands()
        mock_run.return_value = MagicMock(returncode=0, stdout="/p/beta\tbeta\n")
        assert pick(cands, "beta", auto_select=False) == [cands[1]]
        mock_run.assert_called_once()

    @patch("sess_core.picker.subprocess.run")
    def test_multi_select(self, mock_run):
        cands = _cands()
        mock_run.return_value = MagicMock(
            returncode=0, stdout="/p/alpha\talpha\n\tscratch\n")
        assert pick(cands, multi=True, auto_select=False) == [cands[0], cands[2]]
        assert "--multi" in mock_run.call_args[0][0]

    @pytest.mark.parametrize("rc", [1, 130])
    @patch("sess_core.picker.subprocess.run")
    def test_cancel_or_no_match_is_empty(self, mock_run, rc):
        mock_run.return_value = MagicMock(returncode=rc, stdout="")
        assert pick(_cands()) == []

    @patch("sess_core.picker.subprocess.run")
    def test_fzf_error_raises(self, mock_run):
        mock_run.return_value = MagicMock(returncode=2, stdout="")
        with pytest.raises(PickerError):
            pick(_cands())

    @patch("sess_core.picker.subprocess.run", side_effect=FileNotFoundError("fzf"))
    def test_fzf_missing_raises(self, mock_run):
        with pytest.raises(PickerError):
            pick(_cands())

    @patch("sess_core.picker.subprocess.run")
    def test_extended_query_goes_to_fzf(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stdout="")
        pick(_cands(), "^be")
        mock_run.assert_called_once()
