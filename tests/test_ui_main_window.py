import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt5.QtWidgets")

from booking_service import BookingService  # noqa: E402
from models import Catalog, Ledger, Movie  # noqa: E402
from tests.conftest import FIXED_NOW, seats_in_order  # noqa: E402
from ui_main_window import MainWindow  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def window(qapp):
    catalog = Catalog([Movie.create("Test", 100, 2, 2)])
    service = BookingService(catalog, Ledger(), clock=lambda: FIXED_NOW)
    movie = catalog.get(0)
    service.create_booking("Alice", movie, 1, seats_in_order([(0, 0)]))
    service.create_booking("Bob", movie, 1, seats_in_order([(1, 1)]))

    win = MainWindow(service)
    yield win
    win.close()
    win.deleteLater()


def test_cancel_uses_the_searched_customer(window):
    window.cancel_name_edit.setText("Alice")
    window._handle_find_bookings()
    assert window.cancel_btn.isEnabled()

    window._handle_cancel_booking()

    alice, bob = list(window.service.ledger)
    assert alice.cancelled
    assert not bob.cancelled
    assert "Refund amount: 85.00" in window.status_label.text()


def test_editing_the_name_drops_the_found_bookings(window):
    window.cancel_name_edit.setText("Alice")
    window._handle_find_bookings()

    window.cancel_name_edit.setText("Bob")

    assert not window.cancel_btn.isEnabled()
    assert window.cancel_combo.count() == 0

    window._handle_cancel_booking()
    assert not any(b.cancelled for b in window.service.ledger)


def test_name_placeholder_follows_language(window):
    assert window.client_name_edit.placeholderText() == "Full name"

    window._set_language("bg")

    assert window.client_name_edit.placeholderText() == "Име и фамилия"
    assert window.cancel_name_edit.placeholderText() == "Име и фамилия"
