"""Tests for cross-platform file system utilities."""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices

from pdf_creator_gui.utils.fs import containing_folder, open_in_file_manager


class TestContainingFolder:
    def test_directory_is_returned_as_is(self, tmp_path):
        assert containing_folder(tmp_path) == tmp_path

    def test_file_returns_parent(self, tmp_path):
        pdf = tmp_path / "Album.pdf"
        pdf.write_bytes(b"%PDF-1.4")
        assert containing_folder(pdf) == tmp_path


class TestOpenInFileManager:
    """Test cases for the open_in_file_manager function."""

    def test_nonexistent_folder_returns_false(self, tmp_path):
        missing = tmp_path / "missing" / "Album.pdf"

        assert open_in_file_manager(missing) is False

    @patch.object(QDesktopServices, "openUrl")
    def test_qdesktopservices_success(self, mock_open_url, tmp_path):
        mock_open_url.return_value = True

        assert open_in_file_manager(tmp_path) is True

        url = mock_open_url.call_args[0][0]
        assert isinstance(url, QUrl)
        assert url.isLocalFile()
        assert Path(url.toLocalFile()) == tmp_path.resolve()

    @patch.object(QDesktopServices, "openUrl")
    def test_pdf_path_opens_its_folder(self, mock_open_url, tmp_path):
        mock_open_url.return_value = True
        pdf = tmp_path / "Album.pdf"
        pdf.write_bytes(b"%PDF-1.4")

        assert open_in_file_manager(pdf) is True
        assert Path(mock_open_url.call_args[0][0].toLocalFile()) == tmp_path.resolve()

    @patch.object(QDesktopServices, "openUrl", return_value=False)
    @patch("subprocess.run")
    @patch("platform.system", return_value="Windows")
    def test_windows_fallback(self, _mock_system, mock_subprocess, _mock_open_url, tmp_path):
        """Explorer counts as success whatever its return code."""
        mock_subprocess.return_value = Mock(returncode=1)

        assert open_in_file_manager(tmp_path) is True
        mock_subprocess.assert_called_once_with(
            ["explorer", str(tmp_path.resolve())], check=False, capture_output=True
        )

    @patch.object(QDesktopServices, "openUrl", return_value=False)
    @patch("subprocess.run")
    @patch("platform.system", return_value="Linux")
    def test_linux_fallback(self, _mock_system, mock_subprocess, _mock_open_url, tmp_path):
        mock_subprocess.return_value = Mock(returncode=0)

        assert open_in_file_manager(tmp_path) is True
        mock_subprocess.assert_called_once_with(
            ["xdg-open", str(tmp_path.resolve())], check=False, capture_output=True
        )

    @patch("pdf_creator_gui.utils.fs._show_file_manager_error")
    @patch.object(QDesktopServices, "openUrl", return_value=False)
    @patch("subprocess.run", side_effect=FileNotFoundError("xdg-open"))
    @patch("platform.system", return_value="Linux")
    def test_all_methods_fail_shows_error(self, _mock_system, _mock_subprocess, _mock_open_url, mock_error, tmp_path):
        assert open_in_file_manager(tmp_path) is False
        mock_error.assert_called_once()

    @patch("pdf_creator_gui.utils.fs._show_file_manager_error")
    @patch.object(QDesktopServices, "openUrl", return_value=False)
    @patch("subprocess.run")
    @patch("platform.system", return_value="Darwin")
    def test_nonzero_return_code_fails(self, _mock_system, mock_subprocess, _mock_open_url, mock_error, tmp_path):
        mock_subprocess.return_value = Mock(returncode=1)

        assert open_in_file_manager(tmp_path) is False
        mock_error.assert_called_once()

    @patch("pdf_creator_gui.utils.fs._show_file_manager_error")
    @patch.object(QDesktopServices, "openUrl", return_value=False)
    @patch("subprocess.run", side_effect=subprocess.SubprocessError("boom"))
    @patch("platform.system", return_value="Linux")
    def test_subprocess_error_is_handled(self, _mock_system, _mock_subprocess, _mock_open_url, mock_error, tmp_path):
        assert open_in_file_manager(tmp_path) is False
        mock_error.assert_called_once()
