# -*- coding: utf-8 -*-
"""Application entry point."""

from __future__ import annotations

import sys
from PyQt6.QtWidgets import QApplication, QMessageBox

from .core.errors import ConfigurationError
from .core.scene import SceneConfig
from .ui.main_window import MainWindow
from .utils.logger import configure_logging, logger


def main():
    configure_logging(debug="--debug" in sys.argv)
    app = QApplication(sys.argv)
    args = [a for a in sys.argv[1:] if not a.startswith("-")]
    try:
        scene = SceneConfig.load_json(args[0]) if args else SceneConfig().validate()
    except ConfigurationError as ex:
        logger.error("Scene rejected: %s", ex)
        QMessageBox.critical(None, "Invalid scene", str(ex))
        sys.exit(2)
    w = MainWindow(scene)
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
