"""
Main entry point for the PDF Creator application.
"""

import logging
import sys

from PySide6.QtWidgets import QApplication, QMessageBox

from pdf_creator_core.config_manager import ConfigManager
from pdf_creator_core.error_handler import init_logging, setup_error_handling
from pdf_creator_core.model import PdfCreatorModel
from pdf_creator_core.threading import ConversionController
from pdf_creator_gui.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> int:
    """Main application entry point."""
    app = QApplication(sys.argv)

    config_manager = ConfigManager()
    init_logging(config_manager.get_log_level())
    setup_error_handling()

    try:
        model = PdfCreatorModel(title=config_manager.get("last_title"), folder="")
        controller = ConversionController(model)
        window = MainWindow(model, controller, config_manager)
    except Exception as e:
        logger.exception("An error occurred during startup")
        QMessageBox.critical(None, "Startup Error", f"An error occurred during startup:\n{e}")
        return 1

    app.aboutToQuit.connect(controller.shutdown)
    window.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
