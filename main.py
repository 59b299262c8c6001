# main.py

import argparse
import sys
from pathlib import Path

from loguru import logger

from booking_service import BookingService, load_state
from data import DB_PATH, HISTORY_PATH
from i18n import LANGS, get_translations
from log_config import setup_logging
from storage import Storage


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Movie ticket booking")
    parser.add_argument("--console", action="store_true", help="use the text menu instead of the window")
    parser.add_argument("--db", type=Path, default=DB_PATH, help="SQLite file with movies and bookings")
    parser.add_argument("--history", type=Path, default=HISTORY_PATH, help="plain-text booking history")
    parser.add_argument("--lang", choices=sorted(LANGS), default="en")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    storage = Storage(args.db, args.history)
    catalog, ledger = load_state(storage)
    service = BookingService(catalog, ledger, storage=storage)
    logger.info(f"{len(catalog)} movies, {len(ledger)} bookings loaded from {args.db}")

    if args.console:
        from console_menu import ConsoleMenu

        ConsoleMenu(service, storage=storage, translations=get_translations(args.lang)).run()
        return 0

    from PyQt5.QtWidgets import QApplication

    from ui_main_window import MainWindow

    app = QApplication(sys.argv)
    window = MainWindow(service, lang=args.lang)
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
