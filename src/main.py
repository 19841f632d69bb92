import sys
import os

# Ensure src is in python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """
    Application Entry Point.
    """
    try:
        # Reduce noisy Qt theme warnings in sessions without a DBus session bus
        os.environ.setdefault("QT_QPA_PLATFORMTHEME", "")
        os.environ.setdefault("QT_STYLE_OVERRIDE", "Fusion")

        # GUI imports deferred until the environment is prepared
        from PySide6.QtWidgets import QApplication
        from src.core.settings import FilterSettings
        from src.core.logging_handler import QtLogHandler
        from src.ui.main_window import MainWindow

        app = QApplication(sys.argv)
        app.setApplicationName("Live Filter")

        settings = FilterSettings.load()
        settings.apply_logging()

        window = MainWindow(settings)

        # Route Python logging into the window's log panel
        qt_handler = QtLogHandler()
        qt_handler.new_record.connect(window.log_event)
        logging.getLogger().addHandler(qt_handler)
        app.aboutToQuit.connect(lambda: logging.getLogger().removeHandler(qt_handler))

        logger.info("Live Filter started")
        window.show()
        return app.exec()

    except Exception:
        logger.exception("Exception in main()")
        return 1


if __name__ == "__main__":
    sys.exit(main())
