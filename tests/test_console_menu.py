import pytest

from booking_service import BookingService
from console_menu import ConsoleMenu
from i18n import get_translations
from models import Catalog, Ledger, Movie
from tests.conftest import FIXED_NOW


class Script:
    """Feeds prepared answers to the menu; EOF once they run out."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def small_service():
    catalog = Catalog([Movie.create("Test", 100, 2, 2)])
    return BookingService(catalog, Ledger(), clock=lambda: FIXED_NOW)


def run_menu(service, *answers, storage=None, lang="en"):
    output = []
    script = Script(*answers)
    ConsoleMenu(
        service,
        storage=storage,
        translations=get_translations(lang),
        input_fn=script,
        output_fn=output.append,
    ).run()
    return output, script


def test_book_cancel_and_show_history(small_service):
    output, script = run_menu(
        small_service,
        "1", "abc", "1", "Alice", "2", "1 1", "1,1", "1 2",
        "2", "alice", "1",
        "3",
        "9",
        "4",
    )
    text = "\n".join(output)

    assert "1. Test (100.00)" in text
    assert "O O\nO O" in text
    assert "Enter a valid number: " in script.prompts
    assert "Seat unavailable or invalid. Please try again." in text
    assert "Seats: [1,1] [1,2] | Total: 200.00" in text
    assert "1. Test | Seats: 2" in text
    assert "Refund amount: 170.00" in text
    assert "Status: Cancelled" in text
    assert "Invalid choice! Try again." in text
    assert output[-1] == "Data saved. Exiting... Goodbye!"

    booking = small_service.ledger[0]
    assert booking.cancelled
    assert small_service.catalog.get(0).seats.available_count() == 4


def test_rejections_are_reported(small_service):
    output, _ = run_menu(
        small_service,
        "1", "5",
        "1", "1", "Bob", "9",
        "3",
    )
    text = "\n".join(output)

    assert "Invalid movie choice!" in text
    assert "Not enough free seats for this movie." in text
    assert "No booking history found." in text
    # input ran out: the menu exits cleanly
    assert output[-1] == "Data saved. Exiting... Goodbye!"


def test_cancel_with_empty_ledger_does_not_ask_for_name(small_service):
    output, script = run_menu(small_service, "2", "4")

    assert "No existing bookings found." in output
    assert "Enter your name for cancellation: " not in script.prompts
    assert output[-1] == "Data saved. Exiting... Goodbye!"


def test_cancel_for_unknown_customer(small_service):
    output, _ = run_menu(small_service, "1", "1", "Dana", "1", "1 1", "2", "Carol", "4")

    assert "No active bookings found for Carol." in output
    assert not small_service.ledger[0].cancelled


def test_input_ending_mid_booking_exits_cleanly(small_service, storage):
    small_service.storage = storage
    output, _ = run_menu(small_service, "1", "1", "Alice", "2", "1 1", storage=storage)

    assert output[-1] == "Data saved. Exiting... Goodbye!"
    assert len(small_service.ledger) == 0
    assert small_service.catalog.get(0).seats.booked_count() == 0
    assert storage.load_catalog().get(0).seats.booked_count() == 0


def test_history_comes_from_file(small_service, storage):
    small_service.storage = storage
    output, _ = run_menu(small_service, "1", "1", "Dana", "1", "2 2", "3", "4", storage=storage)

    assert storage.read_history() == small_service.history()
    assert "Customer: Dana" in "\n".join(output)


def test_bulgarian_menu(small_service):
    output, _ = run_menu(small_service, "4", lang="bg")
    assert "СИСТЕМА ЗА КИНО БИЛЕТИ" in output
