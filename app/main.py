import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from app.app_state import app_state
from app.controllers.preferences_controller import PreferencesController
from app.controllers.user_controller import UserController
from app.ui.app_shell import AppShell
from core import storage
from core.catalog import MENU_POSITIONS
from core.logging_setup import setup_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="frame-dashboard", description="Multi-group URL dashboard.")
    parser.add_argument("--import-catalog", metavar="FILE", help="import URL groups from a JSON catalog file")
    parser.add_argument("--user", metavar="NAME", help="select (and create if needed) the dashboard user")
    parser.add_argument("--menu", choices=MENU_POSITIONS, help="force the side or top menu for this session")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging()
    storage.init_db()

    users = UserController()
    if args.user:
        success, message = users.select_user(args.user)
    else:
        success, message = users.restore_user()
    if not success:
        logging.error(message)
        return 1
    logging.info("Starting dashboard for user=%s", app_state.current_user_id)

    if args.import_catalog:
        success, message = users.import_catalog(args.import_catalog)
        if not success:
            logging.error(message)
            return 1
        logging.info(message)

    if args.menu:
        PreferencesController().set_override(args.menu)

    app = QApplication(sys.argv[:1])
    app.setOrganizationName("FrameDashboard")
    app.setApplicationName("Frame Dashboard")
    window = AppShell()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
