import sqlite3
from datetime import datetime

import pytest

from models import Booking, Catalog, Ledger, Movie
from storage import PersistenceError, Storage, decode_seats, encode_seats


@pytest.fixture
def ledger():
    return Ledger([
        Booking("Alice", "Inception", [(0, 0), (0, 1)], 400.0,
                datetime(2025, 3, 1, 18, 30, 0, 123456), code="AAAA1111"),
        Booking("Bob", "Test", [(1, 1)], 100.0,
                datetime(2025, 3, 2, 9, 0, 0), code="BBBB2222", cancelled=True),
    ])


def test_nothing_saved_yet(storage):
    assert storage.load_catalog() is None
    assert len(storage.load_ledger()) == 0
    assert storage.read_history() is None


def test_catalog_round_trip(storage, catalog):
    catalog.get(0).seats.book(0, 0)
    catalog.get(0).seats.book(4, 2)
    catalog.get(2).seats.book(1, 1)

    storage.save_catalog(catalog)
    loaded = storage.load_catalog()

    assert loaded == catalog
    assert loaded.get(0).seats.booked_seats() == [(0, 0), (4, 2)]
    assert loaded.get(1).seats.booked_count() == 0


def test_catalog_save_replaces_previous_snapshot(storage, catalog):
    storage.save_catalog(catalog)
    smaller = Catalog([Movie.create("Only", 50, 1, 3)])
    smaller.get(0).seats.book(0, 2)

    storage.save_catalog(smaller)

    assert storage.load_catalog() == smaller


def test_ledger_round_trip(storage, ledger):
    storage.save_ledger(ledger)
    loaded = storage.load_ledger()

    assert loaded == ledger
    assert [b.cancelled for b in loaded] == [False, True]


def test_save_ledger_rewrites_history(storage, ledger):
    storage.save_ledger(Ledger([ledger[0]]))
    storage.save_ledger(ledger)

    history = storage.read_history()
    assert history == ledger.render()
    assert history.count("Booking: AAAA1111") == 1
    assert "Seats: [1,1] [1,2]" in history
    assert "Status: Cancelled" in history


def test_older_database_gets_new_columns(tmp_path):
    db_path = tmp_path / "old.db"
    conn = sqlite3.connect(db_path)
    conn.execute(
        """
        CREATE TABLE bookings (
            position INTEGER PRIMARY KEY,
            client_name TEXT NOT NULL,
            movie_title TEXT NOT NULL,
            seats TEXT NOT NULL,
            total_price REAL NOT NULL,
            created_at TEXT NOT NULL
        )
        """
    )
    conn.execute(
        "INSERT INTO bookings VALUES (0, 'Alice', 'Test', '0:1', 100.0, '2025-03-01T18:30:00')"
    )
    conn.commit()
    conn.close()

    loaded = Storage(db_path, tmp_path / "history.txt").load_ledger()

    assert loaded[0].seats == [(0, 1)]
    assert loaded[0].cancelled is False
    assert loaded[0].code == ""


def test_corrupt_database(tmp_path):
    db_path = tmp_path / "cinema.db"
    db_path.write_bytes(b"garbage" * 500)
    storage = Storage(db_path, tmp_path / "history.txt")

    with pytest.raises(PersistenceError):
        storage.load_catalog()
    with pytest.raises(PersistenceError):
        storage.load_ledger()


def test_unwritable_location(tmp_path, catalog):
    # a directory cannot be opened as a database file
    storage = Storage(tmp_path, tmp_path / "history.txt")
    with pytest.raises(PersistenceError):
        storage.save_catalog(catalog)


def test_history_write_failure(tmp_path, ledger):
    storage = Storage(tmp_path / "cinema.db", tmp_path / "missing" / "history.txt")
    with pytest.raises(PersistenceError):
        storage.save_ledger(ledger)


def test_seat_encoding():
    assert encode_seats([(0, 1), (3, 4)]) == "0:1,3:4"
    assert decode_seats("0:1,3:4") == [(0, 1), (3, 4)]
    assert decode_seats("") == []
