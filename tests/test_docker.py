"""Tests for docker module.

Tests all Docker operations with mocked subprocess calls.
"""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from dockstart.docker import (
    check_docker_status,
    extract_from_image,
    get_extract_cmd,
    run_container,
    safe_docker_run,
)
from dockstart.errors import (
    ContainerError,
    DockerNotFoundError,
    DockerTimeoutError,
    ExtractionError,
)
from dockstart.mounts import PathMapping


class TestSafeDockerRun:
    """Tests for safe_docker_run function."""

    def test_success(self) -> None:
        with patch("dockstart.docker.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="output", stderr="")
            result = safe_docker_run(["docker", "info"])
            assert result.returncode == 0
            assert result.stdout == "output"
            mock_run.assert_called_once()

    def test_passes_cwd_and_env(self) -> None:
        with patch("dockstart.docker.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            safe_docker_run(["docker", "info"], cwd="/work", env={"PATH": "/usr/bin"})
            call_kwargs = mock_run.call_args.kwargs
            assert call_kwargs["cwd"] == "/work"
            assert call_kwargs["env"] == {"PATH": "/usr/bin"}

    def test_env_none_inherits(self) -> None:
        with patch("dockstart.docker.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            safe_docker_run(["docker", "info"])
            assert mock_run.call_args.kwargs["env"] is None

    def test_no_timeout_by_default(self) -> None:
        with patch("dockstart.docker.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            safe_docker_run(["docker", "info"])
            assert mock_run.call_args.kwargs["timeout"] is None

    def test_no_shell(self) -> None:
        with patch("dockstart.docker.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            safe_docker_run(["docker", "info"])
            assert mock_run.call_args.args[0] == ["docker", "info"]
            assert "shell" not in mock_run.call_args.kwargs

    def test_nonzero_exit_returned(self) -> None:
        with patch("dockstart.docker.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=125, stderr="boom")
            assert safe_docker_run(["docker", "run", "x"]).returncode == 125

    def test_docker_not_found(self) -> None:
        with patch("dockstart.docker.subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("docker not found")
            with pytest.raises(DockerNotFoundError) as exc_info:
                safe_docker_run(["docker", "info"])
            assert "Docker not found in PATH" in str(exc_info.value)

    def test_timeout(self) -> None:
        with patch("dockstart.docker.subprocess.run") as mock_run:
            mock_run.side_effect = subprocess.TimeoutExpired(cmd="docker", timeout=30)
            with pytest.raises(DockerTimeoutError) as exc_info:
                safe_docker_run(["docker", "info"], timeout=30)
            assert "timed out after 30s" in str(exc_info.value)


class TestCheckDockerStatus:
    """Tests for check_docker_status function."""

    def test_docker_running(self) -> None:
        with patch("dockstart.docker.safe_docker_run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            assert check_docker_status() is True

    def test_docker_not_running(self) -> None:
        with patch("dockstart.docker.safe_docker_run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1)
            assert check_docker_status() is False

    def test_docker_not_found(self) -> None:
        with patch("dockstart.docker.safe_docker_run") as mock_run:
            mock_run.side_effect = DockerNotFoundError("not found")
            assert check_docker_status() is False

    def test_docker_timeout(self) -> None:
        with patch("dockstart.docker.safe_docker_run") as mock_run:
            mock_run.side_effect = DockerTimeoutError("timeout")
            assert check_docker_status() is False


class TestGetExtractCmd:
    """Tests for get_extract_cmd function."""

    def test_command_shape(self) -> None:
        mapping = PathMapping("/data/app/nginx.conf", "/etc/nginx/nginx.conf")
        assert get_extract_cmd("nginx:1.25", mapping) == [
            "docker",
            "run",
            "--rm",
            "-v",
            "/data/app:/copy_data_tmp",
            "nginx:1.25",
            "bash",
            "-c",
            "stat /etc/nginx/nginx.conf > /dev/null"
            " && cp -r /etc/nginx/nginx.conf /copy_data_tmp/nginx.conf",
        ]

    def test_paths_quoted_in_script(self) -> None:
        mapping = PathMapping("/data/my conf", "/etc/my conf")
        script = get_extract_cmd("img", mapping)[-1]
        assert "'/etc/my conf'" in script
        assert "'/copy_data_tmp/my conf'" in script


class TestExtractFromImage:
    """Tests for extract_from_image function."""

    def test_success(self) -> None:
        mapping = PathMapping("/data/conf", "/etc/conf")
        with patch("dockstart.docker.safe_docker_run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
            extract_from_image("img", mapping, cwd="/work", env={"A": "1"})
            args, kwargs = mock_run.call_args
            assert args[0] == get_extract_cmd("img", mapping)
            assert kwargs["cwd"] == "/work"
            assert kwargs["env"] == {"A": "1"}

    def test_failure_raises(self) -> None:
        mapping = PathMapping("/data/conf", "/etc/missing")
        with patch("dockstart.docker.safe_docker_run") as mock_run:
            mock_run.return_value = MagicMock(
                returncode=1, stdout="", stderr="stat: cannot stat '/etc/missing'"
            )
            with pytest.raises(ExtractionError) as exc_info:
                extract_from_image("img", mapping)
            assert "/etc/missing" in str(exc_info.value)
            assert "cannot stat" in str(exc_info.value)

    def test_failure_without_stderr(self) -> None:
        mapping = PathMapping("/data/conf", "/etc/conf")
        with patch("dockstart.docker.safe_docker_run") as mock_run:
            mock_run.return_value = MagicMock(returncode=2, stdout="", stderr="")
            with pytest.raises(ExtractionError, match="exit code 2"):
                extract_from_image("img", mapping)


class TestRunContainer:
    """Tests for run_container function."""

    def test_returns_stdout(self) -> None:
        with patch("dockstart.docker.safe_docker_run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="abc123\n", stderr="")
            assert run_container(["docker", "run", "-d", "img"]) == "abc123\n"

    def test_failure_raises(self) -> None:
        with patch("dockstart.docker.safe_docker_run") as mock_run:
            mock_run.return_value = MagicMock(
                returncode=125, stdout="", stderr="Conflict. The container name is in use"
            )
            with pytest.raises(ContainerError, match="container name is in use"):
                run_container(["docker", "run", "img"])
