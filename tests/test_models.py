from datetime import datetime

import pytest

from models import Booking, Catalog, Ledger, Movie, SeatGrid, format_seats


def make_booking(name="Alice", title="Test", seats=None, cancelled=False):
    seats = seats or [(0, 0)]
    return Booking(
        customer_name=name,
        movie_title=title,
        seats=seats,
        total_price=100.0 * len(seats),
        created_at=datetime(2025, 3, 1, 18, 30, 5),
        code="ABCD1234",
        cancelled=cancelled,
    )


class TestSeatGrid:
    def test_fresh_grid_is_all_free(self):
        grid = SeatGrid(3, 4)
        assert all(grid.is_available(r, c) for r in range(3) for c in range(4))
        assert grid.available_count() == 12
        assert grid.booked_count() == 0

    @pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (3, 0), (0, 4), (10, 10)])
    def test_out_of_range_is_never_available(self, row, col):
        grid = SeatGrid(3, 4)
        assert grid.is_available(row, col) is False
        assert grid.is_booked(row, col) is False

    def test_book_and_release(self):
        grid = SeatGrid(2, 2)
        grid.book(1, 0)
        assert not grid.is_available(1, 0)
        assert grid.is_booked(1, 0)
        assert grid.booked_seats() == [(1, 0)]

        grid.release(1, 0)
        grid.release(1, 0)
        assert grid.is_available(1, 0)
        assert grid.booked_count() == 0

    def test_book_outside_grid_raises(self):
        grid = SeatGrid(2, 2)
        with pytest.raises(IndexError):
            grid.book(-1, 0)
        assert grid.booked_count() == 0

    def test_release_outside_grid_is_ignored(self):
        grid = SeatGrid(2, 2)
        grid.release(5, 5)
        assert grid.available_count() == 4

    def test_render(self):
        grid = SeatGrid(2, 3)
        grid.book(0, 1)
        assert list(grid.render()) == [["O", "X", "O"], ["O", "O", "O"]]

    def test_bad_dimensions(self):
        with pytest.raises(ValueError):
            SeatGrid(0, 3)
        with pytest.raises(ValueError):
            SeatGrid(2, 2, cells=[[False, False]])


class TestCatalog:
    def test_lookup(self, catalog):
        assert [m.title for m in catalog.list()] == ["Avengers: Endgame", "Inception", "Test"]
        assert catalog.get(1).title == "Inception"
        assert catalog.get(3) is None
        assert catalog.get(-1) is None
        assert catalog.find_by_title("inCEPtion") is catalog.get(1)
        assert catalog.find_by_title("Dune") is None

    def test_movie_needs_positive_price(self):
        with pytest.raises(ValueError):
            Movie.create("Free", 0, 2, 2)


class TestBooking:
    def test_cancel_only_once(self):
        booking = make_booking()
        booking.mark_cancelled()
        assert booking.cancelled
        with pytest.raises(ValueError):
            booking.mark_cancelled()

    def test_refund_amount(self):
        booking = make_booking(seats=[(0, 0), (0, 1), (1, 1)])
        booking.total_price = 750.0
        assert booking.refund_amount(0.85) == pytest.approx(637.5)

    def test_generated_code(self):
        booking = Booking("Bob", "Test", [(0, 0)], 100.0, datetime.now())
        assert len(booking.code) == 8
        assert booking.code.isalnum() and booking.code.upper() == booking.code

    def test_describe(self):
        text = make_booking(seats=[(0, 0), (1, 1)], cancelled=True).describe()
        assert text == (
            "Booking: ABCD1234\n"
            "Customer: Alice\n"
            "Movie: Test\n"
            "Seats: [1,1] [2,2]\n"
            "Total Price: 200.00\n"
            "Date & Time: 01-03-2025 18:30:05\n"
            "Status: Cancelled\n"
            "---------------------------\n"
        )

    def test_format_seats_is_one_indexed(self):
        assert format_seats([(0, 0), (2, 4)]) == "[1,1] [3,5]"


class TestLedger:
    def test_active_for_filters_by_name_and_status(self):
        first = make_booking("Alice")
        other = make_booking("Bob")
        done = make_booking("alice", cancelled=True)
        last = make_booking(" ALICE ")
        ledger = Ledger([first, other, done, last])

        assert ledger.active_for("alice") == [first, last]
        assert ledger.active_for("Carol") == []
        assert len(ledger) == 4
