"""Tests for the platform helpers module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from dwmc_backup.errors import HomeNotSet
from dwmc_backup.platform import home_directory, home_env_var, is_windows


class TestIsWindows:
    def test_true_on_win32(self) -> None:
        with patch("dwmc_backup.platform.sys") as mock_sys:
            mock_sys.platform = "win32"
            assert is_windows() is True

    def test_false_on_linux(self) -> None:
        with patch("dwmc_backup.platform.sys") as mock_sys:
            mock_sys.platform = "linux"
            assert is_windows() is False

    def test_false_on_darwin(self) -> None:
        with patch("dwmc_backup.platform.sys") as mock_sys:
            mock_sys.platform = "darwin"
            assert is_windows() is False


class TestHomeEnvVar:
    def test_windows(self) -> None:
        with patch("dwmc_backup.platform.sys") as mock_sys:
            mock_sys.platform = "win32"
            assert home_env_var() == "USERPROFILE"

    def test_posix(self) -> None:
        with patch("dwmc_backup.platform.sys") as mock_sys:
            mock_sys.platform = "linux"
            assert home_env_var() == "HOME"


class TestHomeDirectory:
    def test_reads_home(self) -> None:
        with patch("dwmc_backup.platform.home_env_var", return_value="HOME"):
            with patch.dict(os.environ, {"HOME": "/home/alex"}):
                assert home_directory() == Path("/home/alex")

    def test_unset(self) -> None:
        with patch("dwmc_backup.platform.home_env_var", return_value="HOME"):
            with patch.dict(os.environ, {}, clear=True):
                with pytest.raises(HomeNotSet, match="HOME is not set"):
                    home_directory()

    def test_empty(self) -> None:
        with patch("dwmc_backup.platform.home_env_var", return_value="HOME"):
            with patch.dict(os.environ, {"HOME": ""}):
                with pytest.raises(HomeNotSet):
                    home_directory()
