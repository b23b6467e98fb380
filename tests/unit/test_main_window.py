"""
Tests for the MainWindow class.
"""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from pdf_creator_core.conversion_state import ConversionOutcome, ConversionState
from pdf_creator_core.errors import ImageDecodeError, NoImagesFound
from pdf_creator_core.model import PdfCreatorModel
from pdf_creator_core.threading import ConversionController
from pdf_creator_gui.main_window import MainWindow


@pytest.fixture
def window(qtbot):
    model = PdfCreatorModel()
    controller = ConversionController(model)
    win = MainWindow(model, controller)
    qtbot.addWidget(win)
    yield win
    controller.shutdown()


class TestMainWindowInitialization:
    """Test MainWindow initialization and setup."""

    def test_window_properties(self, window):
        assert window.windowTitle() == "PDF Creator"
        assert window.last_output_path is None

    def test_initial_widget_state(self, window):
        assert window.title_input.text() == ""
        assert window.folder_label.text() == ""
        assert not window.create_button.isEnabled()
        assert window.cancel_button.isHidden()
        assert window.open_folder_button.isHidden()
        assert window.progress_bar.isHidden()
        assert window.output_hint_label.isHidden()
        assert window.processing_label.text() == ""

    def test_restores_model_values(self, qtbot, tmp_path: Path):
        model = PdfCreatorModel(title="Album", folder=str(tmp_path))
        win = MainWindow(model, ConversionController(model))
        qtbot.addWidget(win)

        assert win.title_input.text() == "Album"
        assert win.folder_label.text() == str(tmp_path)
        assert win.create_button.isEnabled()


class TestMainWindowInputs:
    """Test the title field, folder picker and output preview."""

    def test_typing_updates_model(self, qtbot, window):
        qtbot.keyClicks(window.title_input, "Holiday")
        assert window.model.title == "Holiday"

    def test_create_enabled_only_with_both_inputs(self, window, tmp_path: Path):
        window.title_input.setText("Album")
        assert not window.create_button.isEnabled()

        window.model.folder = str(tmp_path)
        assert window.create_button.isEnabled()

        window.title_input.setText("  ")
        assert not window.create_button.isEnabled()

    def test_output_hint(self, window, tmp_path: Path):
        window.model.folder = str(tmp_path)
        assert window.output_hint_label.isHidden()

        window.title_input.setText("Report")
        assert not window.output_hint_label.isHidden()
        assert window.output_hint_label.text() == f"Output PDF: {tmp_path / 'Report.pdf'}"

    def test_select_folder(self, window, tmp_path: Path):
        with patch("pdf_creator_gui.main_window.QFileDialog.getExistingDirectory", return_value=str(tmp_path)):
            window.on_select_folder()

        assert window.model.folder == str(tmp_path.resolve())
        assert window.folder_label.text() == str(tmp_path.resolve())

    def test_select_folder_cancelled(self, window, tmp_path: Path):
        window.model.folder = str(tmp_path)

        with patch("pdf_creator_gui.main_window.QFileDialog.getExistingDirectory", return_value="") as dialog:
            window.on_select_folder()

        assert window.model.folder == str(tmp_path)
        assert dialog.call_args[0][2] == str(tmp_path)

    def test_start_folder_uses_saved_folder(self, qtbot, tmp_path: Path):
        config_manager = Mock()
        config_manager.get_last_folder.return_value = str(tmp_path)
        model = PdfCreatorModel()
        win = MainWindow(model, ConversionController(model), config_manager)
        qtbot.addWidget(win)

        assert win._start_folder() == str(tmp_path)

    def test_changing_inputs_clears_status(self, window, tmp_path: Path):
        window.processing_label.setText("Done! somewhere.pdf")
        window.open_folder_button.setVisible(True)

        window.title_input.setText("Other")

        assert window.processing_label.text() == ""
        assert window.open_folder_button.isHidden()


class TestConversionDisplay:
    """Test how conversion events are shown."""

    def test_progress_display(self, window):
        window.conversion_handler.on_progress_changed(2, 5, "Added b.png (2/5)")

        assert window.progress_bar.maximum() == 5
        assert window.progress_bar.value() == 2
        assert "b.png" in window.processing_label.text()

    def test_saving_disables_cancel(self, window):
        window.cancel_button.setEnabled(True)

        window.conversion_handler.on_state_changed(ConversionState.SAVING)

        assert not window.cancel_button.isEnabled()
        assert window.processing_label.text() == "Saving..."

    def test_success_display(self, window, tmp_path: Path):
        output = tmp_path / "Album.pdf"

        window.conversion_handler.on_outcome(ConversionOutcome.succeeded(output, pages=3))

        assert window.last_output_path == output
        assert str(output) in window.processing_label.text()
        assert not window.open_folder_button.isHidden()

    def test_no_images_display(self, window):
        window.conversion_handler.on_outcome(ConversionOutcome.failed(NoImagesFound("/photos")))

        assert window.processing_label.text().startswith("No images found")

    def test_failure_display(self, window):
        window.conversion_handler.on_outcome(ConversionOutcome.failed(ImageDecodeError("/photos/bad.png")))

        text = window.processing_label.text()
        assert text.startswith("Failed...")
        assert "bad.png" in text

    def test_cancelled_display(self, window):
        window.conversion_handler.on_outcome(ConversionOutcome.cancelled())
        assert window.processing_label.text() == "Cancelled"

    def test_open_folder_button(self, window, tmp_path: Path):
        window.last_output_path = tmp_path / "Album.pdf"

        with patch("pdf_creator_gui.main_window.open_in_file_manager") as mock_open:
            window.on_open_folder_clicked()

        mock_open.assert_called_once_with(tmp_path / "Album.pdf", window)


class TestEndToEnd:
    def test_full_run_from_window(self, qtbot, window, image_folder: Path):
        window.model.folder = str(image_folder)
        window.title_input.setText("Album")

        with qtbot.waitSignal(window.controller.conversionFinished, timeout=10000):
            window.on_create_clicked()
            assert window.title_input.isReadOnly()
            assert not window.select_folder_button.isEnabled()

        assert (image_folder / "Album.pdf").exists()
        assert window.processing_label.text().startswith("Done!")
        assert window.create_button.isEnabled()
        assert window.cancel_button.isHidden()
        assert window.progress_bar.isHidden()
        assert not window.title_input.isReadOnly()

    def test_close_saves_settings_and_shuts_down(self, qtbot, tmp_path: Path):
        config_manager = Mock()
        config_manager.get.return_value = ""
        model = PdfCreatorModel(title="Album", folder=str(tmp_path))
        controller = Mock(spec=ConversionController)
        controller.is_enabled.return_value = True
        controller.is_running.return_value = False
        controller.output_preview.return_value = str(tmp_path / "Album.pdf")
        win = MainWindow(model, controller, config_manager)
        qtbot.addWidget(win)

        win.close()

        config_manager.set.assert_any_call("last_title", "Album")
        config_manager.set.assert_any_call("last_folder", str(tmp_path))
        controller.shutdown.assert_called_once()
