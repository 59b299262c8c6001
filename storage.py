# storage.py

import sqlite3
from contextlib import closing
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from loguru import logger

from data import DB_PATH, HISTORY_PATH
from models import Booking, Catalog, Ledger, Movie, Seat, SeatGrid


class PersistenceError(Exception):
    """Loading or saving the catalog / ledger failed."""


def get_connection(db_path: Path = DB_PATH) -> sqlite3.Connection:
    return sqlite3.connect(db_path)


def init_db(conn: sqlite3.Connection) -> None:
    """Creates the tables and runs migrations if needed."""
    cur = conn.cursor()

    # Movies in catalog order
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS movies (
            position INTEGER PRIMARY KEY,
            title TEXT NOT NULL,
            price_per_ticket REAL NOT NULL,
            num_rows INTEGER NOT NULL,
            num_cols INTEGER NOT NULL
        )
        """
    )

    # Booked cells per movie
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS taken_seats (
            movie_position INTEGER NOT NULL,
            seat_row INTEGER NOT NULL,
            seat_col INTEGER NOT NULL,
            PRIMARY KEY (movie_position, seat_row, seat_col)
        )
        """
    )

    # Ledger in creation order
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS bookings (
            position INTEGER PRIMARY KEY,
            client_name TEXT NOT NULL,
            movie_title TEXT NOT NULL,
            seats TEXT NOT NULL,
            total_price REAL NOT NULL,
            created_at TEXT NOT NULL
        )
        """
    )

    _ensure_booking_columns(cur)
    conn.commit()


def _ensure_booking_columns(cur: sqlite3.Cursor) -> None:
    """Adds columns missing from bookings (older databases)."""
    cur.execute("PRAGMA table_info(bookings)")
    cols = {row[1] for row in cur.fetchall()}

    def add_column_if_missing(name: str, ddl: str) -> None:
        if name not in cols:
            cur.execute(f"ALTER TABLE bookings ADD COLUMN {name} {ddl}")

    add_column_if_missing("booking_code", "TEXT NOT NULL DEFAULT ''")
    add_column_if_missing("is_canceled", "INTEGER NOT NULL DEFAULT 0")


def encode_seats(seats: List[Seat]) -> str:
    return ",".join(f"{r}:{c}" for r, c in seats)


def decode_seats(text: str) -> List[Seat]:
    seats = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        row, col = part.split(":")
        seats.append((int(row), int(col)))
    return seats


class Storage:
    """
    Durable home of the catalog and the ledger.

    Both are snapshots: every save replaces what was stored before.
    Saving the ledger also rewrites the plain-text booking history.
    Any SQLite or file error comes out as PersistenceError.
    """

    def __init__(self, db_path: Path = DB_PATH, history_path: Path = HISTORY_PATH) -> None:
        self.db_path = Path(db_path)
        self.history_path = Path(history_path)

    def _connect(self) -> sqlite3.Connection:
        conn = get_connection(self.db_path)
        init_db(conn)
        return conn

    # ----------------- CATALOG -----------------

    def load_catalog(self) -> Optional[Catalog]:
        """Returns None when nothing has been saved yet."""
        try:
            with closing(self._connect()) as conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    SELECT position, title, price_per_ticket, num_rows, num_cols
                    FROM movies
                    ORDER BY position
                    """
                )
                movie_rows = cur.fetchall()
                if not movie_rows:
                    return None

                movies = []
                for position, title, price, num_rows, num_cols in movie_rows:
                    grid = SeatGrid(num_rows, num_cols)
                    cur.execute(
                        "SELECT seat_row, seat_col FROM taken_seats WHERE movie_position = ?",
                        (position,),
                    )
                    for row, col in cur.fetchall():
                        grid.book(row, col)
                    movies.append(Movie(title=title, price_per_ticket=price, seats=grid))
        except (sqlite3.Error, OSError, ValueError, IndexError) as e:
            raise PersistenceError(f"Could not load movies from {self.db_path}: {e}") from e

        logger.debug(f"Loaded {len(movies)} movies from {self.db_path}")
        return Catalog(movies)

    def save_catalog(self, catalog: Catalog) -> None:
        try:
            with closing(self._connect()) as conn:
                with conn:
                    cur = conn.cursor()
                    cur.execute("DELETE FROM taken_seats")
                    cur.execute("DELETE FROM movies")
                    for position, movie in enumerate(catalog):
                        cur.execute(
                            """
                            INSERT INTO movies (position, title, price_per_ticket, num_rows, num_cols)
                            VALUES (?, ?, ?, ?, ?)
                            """,
                            (
                                position,
                                movie.title,
                                movie.price_per_ticket,
                                movie.seats.rows,
                                movie.seats.cols,
                            ),
                        )
                        cur.executemany(
                            """
                            INSERT INTO taken_seats (movie_position, seat_row, seat_col)
                            VALUES (?, ?, ?)
                            """,
                            [(position, r, c) for r, c in movie.seats.booked_seats()],
                        )
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Could not save movies to {self.db_path}: {e}") from e

    # ----------------- LEDGER -----------------

    def load_ledger(self) -> Ledger:
        try:
            with closing(self._connect()) as conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    SELECT booking_code, client_name, movie_title, seats,
                           total_price, created_at, is_canceled
                    FROM bookings
                    ORDER BY position
                    """
                )
                rows = cur.fetchall()
            bookings = [
                Booking(
                    code=code,
                    customer_name=client_name,
                    movie_title=movie_title,
                    seats=decode_seats(seats),
                    total_price=total_price,
                    created_at=datetime.fromisoformat(created_at),
                    cancelled=bool(is_canceled),
                )
                for code, client_name, movie_title, seats, total_price, created_at, is_canceled in rows
            ]
        except (sqlite3.Error, OSError, ValueError) as e:
            raise PersistenceError(f"Could not load bookings from {self.db_path}: {e}") from e

        logger.debug(f"Loaded {len(bookings)} bookings from {self.db_path}")
        return Ledger(bookings)

    def save_ledger(self, ledger: Ledger) -> None:
        try:
            with closing(self._connect()) as conn:
                with conn:
                    cur = conn.cursor()
                    cur.execute("DELETE FROM bookings")
                    cur.executemany(
                        """
                        INSERT INTO bookings (
                            position, booking_code, client_name, movie_title,
                            seats, total_price, created_at, is_canceled
                        )
                        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        [
                            (
                                position,
                                b.code,
                                b.customer_name,
                                b.movie_title,
                                encode_seats(b.seats),
                                b.total_price,
                                b.created_at.isoformat(),
                                int(b.cancelled),
                            )
                            for position, b in enumerate(ledger)
                        ],
                    )
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Could not save bookings to {self.db_path}: {e}") from e

        self.write_history(ledger)

    # ----------------- HISTORY -----------------

    def write_history(self, ledger: Ledger) -> None:
        try:
            self.history_path.write_text(ledger.render(), encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Could not write booking history to {self.history_path}: {e}") from e

    def read_history(self) -> Optional[str]:
        """Returns None when there is no history yet."""
        try:
            if not self.history_path.exists():
                return None
            text = self.history_path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Could not read booking history from {self.history_path}: {e}") from e
        return text or None
