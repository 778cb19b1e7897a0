# main.py
"""
GeoMeasure entry point.
"""

import os
import sys

from PySide6.QtWidgets import QApplication

from constants import APP_NAME, APP_VERSION, ORGANIZATION, ORGANIZATION_DOMAIN
from utils.logger import get_logger, level_from_name, setup_logging


def main() -> int:
    setup_logging(level=level_from_name(os.environ.get("GEOMEASURE_LOG_LEVEL", "")))
    logger = get_logger(__name__)

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName(ORGANIZATION)
    app.setOrganizationDomain(ORGANIZATION_DOMAIN)

    # Imported after QApplication exists
    from ui.main_window import MainWindow

    win = MainWindow()
    win.show()
    logger.info(f"{APP_NAME} {APP_VERSION} started")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
