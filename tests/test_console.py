"""
Tests for console output helpers and verbosity handling.
"""

from talon.utils import console as talon_console
from talon.utils.logging import debug, info, set_verbosity


class TestVerbosity:
    def test_debug_hidden_by_default(self, capsys):
        debug("hidden detail")
        assert "hidden detail" not in capsys.readouterr().out

    def test_debug_shown_when_enabled(self, capsys):
        set_verbosity(False, True)
        debug("visible detail")
        assert "[DEBUG] visible detail" in capsys.readouterr().out

    def test_info_needs_verbose(self, capsys):
        info("quiet")
        set_verbosity(True, False)
        info("loud")
        output = capsys.readouterr().out
        assert "quiet" not in output
        assert "loud" in output


class TestRunSummary:
    def test_counts_and_total(self, capsys):
        talon_console.print_run_summary({"Success": 1, "Failed": 3}, ["[+] dc01 CORP.LOCAL\\jdoe:pw = Success"])
        output = capsys.readouterr().out
        assert "RUN SUMMARY" in output
        assert "TOTAL" in output
        assert "VALID CREDENTIALS" in output

    def test_enumeration_title(self, capsys):
        talon_console.print_run_summary({"User Exist": 1}, ["[+] dc01 CORP.LOCAL\\jdoe:  = User Exist"], enumeration=True)
        output = capsys.readouterr().out
        assert "EXISTING USERS" in output
        assert "TOTAL" not in output

    def test_nothing_recorded(self, capsys):
        talon_console.print_run_summary({}, [])
        assert capsys.readouterr().out == ""


def test_banner(capsys):
    talon_console.print_banner()
    assert "\\___" in capsys.readouterr().out


def test_debug_enabled_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("TALON_DEBUG", "1")
    debug("from env")
    assert "[DEBUG] from env" in capsys.readouterr().out


def test_debug_flag_exports_environment():
    import os

    set_verbosity(False, True)
    assert os.environ["TALON_DEBUG"] == "1"
