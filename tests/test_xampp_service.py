"""Tests for Apache/MySQL service control (subprocess mocked)."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from xtools_common import XamppConfig
from xtools.errors import ServiceError
from xtools.services import xampp_service
from xtools.services.xampp_service import Service


def _result(returncode=0, stdout="", stderr=""):
    return type("R", (), {"returncode": returncode, "stdout": stdout, "stderr": stderr})()


TASKLIST = (
    '"httpd.exe","1234","Console","1","12,345 K"\n'
    '"httpd.exe","5678","Console","1","9,000 K"\n'
)


class TestStatus:
    def test_running_pids(self):
        with patch("xtools.services.xampp_service.process.run", return_value=_result(stdout=TASKLIST)):
            assert xampp_service.running_pids("httpd.exe") == [1234, 5678]

    def test_no_match(self):
        out = "INFO: No tasks are running which match the specified criteria.\n"
        with patch("xtools.services.xampp_service.process.run", return_value=_result(stdout=out)):
            assert xampp_service.is_running(Service.MYSQL) is False

    def test_tasklist_failure(self):
        with patch("xtools.services.xampp_service.process.run", return_value=_result(returncode=1)):
            assert xampp_service.running_pids("httpd.exe") == []


class TestLifecycle:
    def test_start_missing_script(self, tmp_config: XamppConfig):
        with patch("xtools.services.xampp_service.process.run", return_value=_result(stdout="")):
            with pytest.raises(ServiceError, match="apache_start.bat"):
                xampp_service.start(tmp_config, Service.APACHE)

    def test_start_already_running(self, tmp_config: XamppConfig):
        with patch("xtools.services.xampp_service.process.run", return_value=_result(stdout=TASKLIST)), \
                patch("xtools.services.xampp_service.subprocess.Popen") as popen:
            xampp_service.start(tmp_config, Service.APACHE)
        popen.assert_not_called()

    def test_start_launches_script(self, tmp_config: XamppConfig):
        tmp_config.xampp_root.mkdir()
        script = tmp_config.xampp_root / "mysql_start.bat"
        script.write_text("")
        with patch("xtools.services.xampp_service.process.run", return_value=_result(stdout="")), \
                patch("xtools.services.xampp_service.subprocess.Popen") as popen:
            xampp_service.start(tmp_config, Service.MYSQL)
        assert popen.call_args[0][0] == ["cmd", "/c", str(script)]

    def test_stop_when_not_running(self, tmp_config: XamppConfig):
        with patch("xtools.services.xampp_service.process.run", return_value=_result(stdout="")) as run:
            xampp_service.stop(tmp_config, Service.APACHE)
        assert run.call_count == 1

    def test_config_test_failure(self, tmp_config: XamppConfig):
        failed = _result(returncode=1, stderr="Syntax error on line 12")
        with patch("xtools.services.xampp_service.process.run", return_value=failed):
            with pytest.raises(ServiceError, match="line 12"):
                xampp_service.config_test(tmp_config)

    def test_config_test_ok(self, tmp_config: XamppConfig):
        with patch("xtools.services.xampp_service.process.run", return_value=_result(stderr="Syntax OK\n")):
            assert xampp_service.config_test(tmp_config) == "Syntax OK"

    def test_image_names(self):
        assert xampp_service.image_name(Service.APACHE) == "httpd.exe"
        assert xampp_service.image_name(Service.MYSQL) == "mysqld.exe"
