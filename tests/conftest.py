from datetime import datetime
from typing import Iterable, List, Optional

import pytest

from booking_service import BookingService
from models import Catalog, Ledger, Movie, Seat
from storage import Storage

FIXED_NOW = datetime(2025, 3, 1, 18, 30, 0)


def seats_in_order(seats: Iterable[Seat]):
    """Seat selector that hands out the given coordinates one call at a time."""
    queue: List[Seat] = list(seats)
    calls = []

    def selector(seat_index: int, attempt: int) -> Optional[Seat]:
        calls.append((seat_index, attempt))
        return queue.pop(0) if queue else None

    selector.calls = calls
    return selector


@pytest.fixture
def catalog():
    return Catalog([
        Movie.create("Avengers: Endgame", 250, 5, 5),
        Movie.create("Inception", 200, 5, 5),
        Movie.create("Test", 100, 2, 2),
    ])


@pytest.fixture
def storage(tmp_path):
    return Storage(tmp_path / "cinema.db", tmp_path / "booking_history.txt")


@pytest.fixture
def service(catalog):
    return BookingService(catalog, Ledger(), clock=lambda: FIXED_NOW)


@pytest.fixture
def stored_service(catalog, storage):
    return BookingService(catalog, Ledger(), storage=storage, clock=lambda: FIXED_NOW)
