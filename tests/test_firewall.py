"""Tests for netsh firewall rules (subprocess mocked)."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from xtools.errors import FirewallError
from xtools.services import firewall


def _result(returncode=0, stdout="", stderr=""):
    return type("R", (), {"returncode": returncode, "stdout": stdout, "stderr": stderr})()


class TestFirewall:
    def test_rule_name(self):
        assert firewall.rule_name(443) == "xtools TCP 443"
        assert firewall.rule_name(53, "udp") == "xtools UDP 53"

    def test_allow_adds_missing_rule(self):
        results = [_result(returncode=1, stdout="No rules match"), _result(stdout="Ok.")]
        with patch("xtools.services.firewall.process.run", side_effect=results) as run:
            assert firewall.allow_port(8080) is True
        add_cmd = run.call_args_list[1][0][0]
        assert "localport=8080" in add_cmd
        assert "name=xtools TCP 8080" in add_cmd

    def test_allow_existing_rule(self):
        shown = _result(stdout="Rule Name: xtools TCP 80\n")
        with patch("xtools.services.firewall.process.run", return_value=shown) as run:
            assert firewall.allow_port(80) is False
        assert run.call_count == 1

    def test_remove_missing_rule(self):
        with patch("xtools.services.firewall.process.run", return_value=_result(returncode=1)):
            assert firewall.remove_rule(80) is False

    def test_netsh_failure(self):
        results = [_result(returncode=1), _result(returncode=1, stdout="The requested operation requires elevation.")]
        with patch("xtools.services.firewall.process.run", side_effect=results):
            with pytest.raises(FirewallError, match="elevation"):
                firewall.allow_port(80)
