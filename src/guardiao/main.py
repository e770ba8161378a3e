"""
Application Initialization
==========================
This module constructs the application and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Creates the Qt application (organization ids for QSettings).
2. Configures logging, with the optional log file from the settings.
3. Instantiates the global Store (which owns the SurveySession).
4. Instantiates the Main Window (View), passing the Store.
5. Starts the concurrent loads of the survey documents.
"""
import logging
import sys

from guardiao.app.application import create_app, resolve_data_sources, resolve_log_file
from guardiao.app.state import Store
from guardiao.app.ui.main_window import MainWindow
from guardiao.logging_config import setup_logging


def main() -> int:
    # QSettings needs the organization ids set by create_app
    app = create_app()

    # Use logging.DEBUG to see navigation transitions and dropped coordinates
    setup_logging(level=logging.INFO, log_file=resolve_log_file())

    store = Store()
    window = MainWindow(store)
    window.show()

    store.start_loading(resolve_data_sources())

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
