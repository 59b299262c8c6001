# models.py

import random
import string
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List, Optional, Tuple

from data import DATE_FORMAT

Seat = Tuple[int, int]  # (row, col), 0-indexed


@dataclass
class SeatGrid:
    """Seat map of one movie. True = booked, False = free."""

    rows: int
    cols: int
    cells: List[List[bool]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Seat grid must be at least 1x1, got {self.rows}x{self.cols}")
        if not self.cells:
            self.cells = [[False] * self.cols for _ in range(self.rows)]
        elif len(self.cells) != self.rows or any(len(r) != self.cols for r in self.cells):
            raise ValueError("Seat cells do not match grid dimensions")

    def _in_range(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_available(self, row: int, col: int) -> bool:
        return self._in_range(row, col) and not self.cells[row][col]

    def is_booked(self, row: int, col: int) -> bool:
        return self._in_range(row, col) and self.cells[row][col]

    def book(self, row: int, col: int) -> None:
        # availability is the caller's job, only the range is checked here
        if not self._in_range(row, col):
            raise IndexError(f"Seat ({row}, {col}) is outside a {self.rows}x{self.cols} grid")
        self.cells[row][col] = True

    def release(self, row: int, col: int) -> None:
        if self._in_range(row, col):
            self.cells[row][col] = False

    def booked_count(self) -> int:
        return sum(sum(1 for cell in row if cell) for row in self.cells)

    def available_count(self) -> int:
        return self.rows * self.cols - self.booked_count()

    def booked_seats(self) -> List[Seat]:
        return [
            (r, c)
            for r in range(self.rows)
            for c in range(self.cols)
            if self.cells[r][c]
        ]

    def render(self, booked: str = "X", free: str = "O") -> Iterator[List[str]]:
        for row in self.cells:
            yield [booked if cell else free for cell in row]


@dataclass
class Movie:
    title: str
    price_per_ticket: float
    seats: SeatGrid

    def __post_init__(self) -> None:
        if self.price_per_ticket <= 0:
            raise ValueError(f"Ticket price must be positive, got {self.price_per_ticket}")

    @classmethod
    def create(cls, title: str, price_per_ticket: float, rows: int, cols: int) -> "Movie":
        return cls(title=title, price_per_ticket=price_per_ticket, seats=SeatGrid(rows, cols))


class Catalog:
    """Fixed, ordered list of movies."""

    def __init__(self, movies: List[Movie]) -> None:
        self._movies = list(movies)

    def list(self) -> List[Movie]:
        return list(self._movies)

    def get(self, index: int) -> Optional[Movie]:
        if 0 <= index < len(self._movies):
            return self._movies[index]
        return None

    def find_by_title(self, title: str) -> Optional[Movie]:
        wanted = title.casefold()
        for movie in self._movies:
            if movie.title.casefold() == wanted:
                return movie
        return None

    def __len__(self) -> int:
        return len(self._movies)

    def __iter__(self) -> Iterator[Movie]:
        return iter(self._movies)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Catalog) and self._movies == other._movies


def generate_booking_code() -> str:
    return "".join(random.choices(string.ascii_uppercase + string.digits, k=8))


def format_seats(seats: List[Seat]) -> str:
    """Seats as shown to people: 1-indexed, e.g. "[1,1] [1,2]"."""
    return " ".join(f"[{r + 1},{c + 1}]" for r, c in seats)


@dataclass
class Booking:
    customer_name: str
    movie_title: str
    seats: List[Seat]
    total_price: float
    created_at: datetime
    code: str = field(default_factory=generate_booking_code)
    cancelled: bool = False

    @property
    def seat_count(self) -> int:
        return len(self.seats)

    def mark_cancelled(self) -> None:
        if self.cancelled:
            raise ValueError(f"Booking {self.code} is already cancelled")
        self.cancelled = True

    def refund_amount(self, rate: float) -> float:
        return self.total_price * rate

    def matches_customer(self, name: str) -> bool:
        return self.customer_name.strip().casefold() == name.strip().casefold()

    def describe(self) -> str:
        """History block for this booking."""
        status = "Cancelled" if self.cancelled else "Confirmed"
        return (
            f"Booking: {self.code}\n"
            f"Customer: {self.customer_name}\n"
            f"Movie: {self.movie_title}\n"
            f"Seats: {format_seats(self.seats)}\n"
            f"Total Price: {self.total_price:.2f}\n"
            f"Date & Time: {self.created_at.strftime(DATE_FORMAT)}\n"
            f"Status: {status}\n"
            "---------------------------\n"
        )


class Ledger:
    """Every booking ever made, in creation order. Entries are never removed."""

    def __init__(self, bookings: Optional[List[Booking]] = None) -> None:
        self._bookings: List[Booking] = list(bookings or [])

    def append(self, booking: Booking) -> None:
        self._bookings.append(booking)

    def active_for(self, customer_name: str) -> List[Booking]:
        return [
            b for b in self._bookings
            if not b.cancelled and b.matches_customer(customer_name)
        ]

    def render(self) -> str:
        return "".join(b.describe() for b in self._bookings)

    def __len__(self) -> int:
        return len(self._bookings)

    def __iter__(self) -> Iterator[Booking]:
        return iter(self._bookings)

    def __getitem__(self, index: int) -> Booking:
        return self._bookings[index]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Ledger) and self._bookings == other._bookings
