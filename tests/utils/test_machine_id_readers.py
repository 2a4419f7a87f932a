"""Unit tests for the platform machine id readers."""

import stat
import subprocess
from unittest.mock import MagicMock, mock_open, patch

import pytest

from galog.utils.machine_id import (
    LINUX_MACHINE_ID_MAX_SIZE,
    get_machine_id,
    read_linux_machine_id,
    read_macos_machine_id,
)


def regular_file(size=33):
    st = MagicMock()
    st.st_size = size
    st.st_mode = stat.S_IFREG | 0o644
    return st


class TestReadLinuxMachineId:
    @pytest.mark.unit
    def test_reads_first_available_file(self) -> None:
        with patch("galog.utils.machine_id.os.stat", return_value=regular_file()), patch(
            "builtins.open", mock_open(read_data="abc123\n")
        ):
            assert read_linux_machine_id() == "abc123"

    @pytest.mark.unit
    def test_skips_missing_files(self) -> None:
        with patch("galog.utils.machine_id.os.stat", side_effect=FileNotFoundError()):
            assert read_linux_machine_id() is None

    @pytest.mark.unit
    def test_skips_oversized_files(self) -> None:
        with patch(
            "galog.utils.machine_id.os.stat",
            return_value=regular_file(LINUX_MACHINE_ID_MAX_SIZE + 1),
        ), patch("builtins.open", mock_open(read_data="abc")) as opened:
            assert read_linux_machine_id() is None
            opened.assert_not_called()

    @pytest.mark.unit
    def test_skips_non_regular_files(self) -> None:
        st = regular_file()
        st.st_mode = stat.S_IFDIR | 0o755
        with patch("galog.utils.machine_id.os.stat", return_value=st):
            assert read_linux_machine_id() is None

    @pytest.mark.unit
    def test_empty_file_falls_through(self) -> None:
        with patch("galog.utils.machine_id.os.stat", return_value=regular_file()), patch(
            "builtins.open", mock_open(read_data="\n")
        ):
            assert read_linux_machine_id() is None


class TestReadMacosMachineId:
    @pytest.mark.unit
    def test_parses_ioreg_output(self) -> None:
        result = MagicMock(
            returncode=0,
            stdout='  | "IOPlatformSerialNumber" = "X"\n  | "IOPlatformUUID" = "1234-ABCD"\n',
        )
        with patch("galog.utils.machine_id.subprocess.run", return_value=result):
            assert read_macos_machine_id() == "1234-ABCD"

    @pytest.mark.unit
    def test_missing_binary(self) -> None:
        with patch("galog.utils.machine_id.subprocess.run", side_effect=FileNotFoundError()):
            assert read_macos_machine_id() is None

    @pytest.mark.unit
    def test_timeout(self) -> None:
        with patch(
            "galog.utils.machine_id.subprocess.run",
            side_effect=subprocess.TimeoutExpired("ioreg", 5),
        ):
            assert read_macos_machine_id() is None

    @pytest.mark.unit
    def test_non_zero_exit(self) -> None:
        result = MagicMock(returncode=1, stdout="")
        with patch("galog.utils.machine_id.subprocess.run", return_value=result):
            assert read_macos_machine_id() is None


class TestGetMachineId:
    @pytest.mark.unit
    def test_dispatches_on_platform(self) -> None:
        reader = MagicMock(return_value="id-1")
        with patch("galog.utils.machine_id.platform.system", return_value="Linux"), patch.dict(
            "galog.utils.machine_id.READERS", {"linux": reader}
        ):
            assert get_machine_id() == "id-1"
        reader.assert_called_once_with()

    @pytest.mark.unit
    def test_unknown_platform(self) -> None:
        with patch("galog.utils.machine_id.platform.system", return_value="Plan9"):
            assert get_machine_id() is None

