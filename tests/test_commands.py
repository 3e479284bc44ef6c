# SPDX-License-Identifier: Apache-2.0
"""Tests for docker info / sysctl queries (subprocess mocked)."""

import subprocess
from unittest.mock import patch

import pytest

from dockres.exceptions import MethodUnavailable
from dockres.host import _commands
from dockres.settings import Settings


def _completed(stdout: str) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr="")


@pytest.fixture
def which():
    with patch("dockres.host._commands.shutil.which", return_value="/usr/bin/docker") as m:
        yield m


class TestDockerInfo:
    def test_cpu_count(self, which):
        with patch("dockres.host._commands.subprocess.run", return_value=_completed("6\n")) as run:
            assert _commands.docker_cpu_count(Settings()) == 6
        cmd = run.call_args.args[0]
        assert cmd == ["docker", "info", "--format", "{{.NCPU}}"]
        assert run.call_args.kwargs["check"] is True

    def test_mem_total(self, which):
        with patch("dockres.host._commands.subprocess.run", return_value=_completed("8233017344")) as run:
            assert _commands.docker_mem_total(Settings()) == 8233017344
        assert run.call_args.args[0][-1] == "{{.MemTotal}}"

    def test_custom_binary_and_timeout(self, which):
        settings = Settings(docker_bin="podman", command_timeout=5)
        with patch("dockres.host._commands.subprocess.run", return_value=_completed("2")) as run:
            _commands.docker_cpu_count(settings)
        assert run.call_args.args[0][0] == "podman"
        assert run.call_args.kwargs["timeout"] == 5
        which.assert_called_with("podman")

    def test_binary_missing(self):
        with patch("dockres.host._commands.shutil.which", return_value=None), \
             patch("dockres.host._commands.subprocess.run") as run:
            with pytest.raises(MethodUnavailable, match="docker not installed"):
                _commands.docker_cpu_count(Settings())
        run.assert_not_called()

    def test_daemon_not_running(self, which):
        err = subprocess.CalledProcessError(
            1, ["docker"], stderr="Cannot connect to the Docker daemon\n",
        )
        with patch("dockres.host._commands.subprocess.run", side_effect=err):
            with pytest.raises(MethodUnavailable, match="Cannot connect"):
                _commands.docker_cpu_count(Settings())

    def test_timeout(self, which):
        err = subprocess.TimeoutExpired(["docker"], 5)
        with patch("dockres.host._commands.subprocess.run", side_effect=err):
            with pytest.raises(MethodUnavailable, match="timed out"):
                _commands.docker_mem_total(Settings(command_timeout=5))

    def test_non_integer_output(self, which):
        with patch("dockres.host._commands.subprocess.run", return_value=_completed("<no value>")):
            with pytest.raises(MethodUnavailable, match="unexpected output"):
                _commands.docker_cpu_count(Settings())


class TestSysctl:
    def test_memsize(self):
        with patch("dockres.host._commands.shutil.which", return_value="/usr/sbin/sysctl"), \
             patch("dockres.host._commands.subprocess.run", return_value=_completed("17179869184\n")) as run:
            assert _commands.sysctl_mem_total(Settings()) == 17179869184
        assert run.call_args.args[0] == ["sysctl", "-n", "hw.memsize"]
