# booking_service.py

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Tuple

from loguru import logger

from data import DEFAULT_MOVIES, REFUND_RATE
from models import Booking, Catalog, Ledger, Movie, Seat, SeatGrid, format_seats
from storage import PersistenceError, Storage

# (seat_index, attempt) -> seat, or None to give up
SeatSelector = Callable[[int, int], Optional[Seat]]
# active bookings -> 0-based index, or None
BookingSelector = Callable[[List[Booking]], Optional[int]]


class Outcome(str, Enum):
    OK = "ok"
    EMPTY_NAME = "empty_name"
    INVALID_SELECTION = "invalid_selection"
    INSUFFICIENT_CAPACITY = "insufficient_capacity"
    SELECTION_ABORTED = "selection_aborted"
    NO_ACTIVE_BOOKINGS = "no_active_bookings"


@dataclass
class BookingResult:
    outcome: Outcome
    booking: Optional[Booking] = None
    refund: Optional[float] = None
    # False when the state could not be written to disk
    saved: bool = True

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK


def default_catalog() -> Catalog:
    return Catalog([Movie.create(*seed) for seed in DEFAULT_MOVIES])


def load_state(storage: Storage) -> Tuple[Catalog, Ledger]:
    """Catalog and ledger from disk, falling back to the defaults."""
    try:
        catalog = storage.load_catalog()
    except PersistenceError as e:
        logger.error(f"{e}; starting with the default movies")
        catalog = None
    if catalog is None:
        logger.info("Initializing new movie data")
        catalog = default_catalog()

    try:
        ledger = storage.load_ledger()
    except PersistenceError as e:
        logger.error(f"{e}; starting with an empty booking list")
        ledger = Ledger()

    return catalog, ledger


class BookingService:
    def __init__(
        self,
        catalog: Catalog,
        ledger: Ledger,
        storage: Optional[Storage] = None,
        clock: Callable[[], datetime] = datetime.now,
        refund_rate: float = REFUND_RATE,
    ) -> None:
        self.catalog = catalog
        self.ledger = ledger
        self.storage = storage
        self.clock = clock
        self.refund_rate = refund_rate

    def list_movies(self) -> List[Movie]:
        return self.catalog.list()

    def create_booking(
        self,
        customer_name: str,
        movie: Movie,
        seat_count: int,
        seat_selector: SeatSelector,
        max_attempts: Optional[int] = None,
    ) -> BookingResult:
        """
        Reserves seat_count seats one at a time, asking seat_selector for
        each until it names a free seat. Seats are booked as soon as they
        are picked. If the selector gives up (returns None or runs past
        max_attempts for one seat) the seats picked so far are released
        and nothing is recorded. The same happens when the selector raises;
        the exception is passed on.
        """
        name = customer_name.strip()
        if not name:
            logger.debug("Booking rejected: empty customer name")
            return BookingResult(Outcome.EMPTY_NAME)
        if seat_count < 1:
            logger.debug(f"Booking rejected: seat count {seat_count}")
            return BookingResult(Outcome.INVALID_SELECTION)

        grid = movie.seats
        if seat_count > grid.available_count():
            logger.debug(
                f"Booking rejected: {seat_count} seats requested, "
                f"{grid.available_count()} free for {movie.title}"
            )
            return BookingResult(Outcome.INSUFFICIENT_CAPACITY)

        picked: List[Seat] = []
        try:
            for seat_index in range(seat_count):
                seat = self._pick_seat(grid, seat_index, seat_selector, max_attempts)
                if seat is None:
                    self._release_all(grid, picked)
                    logger.debug(f"Booking for {name} aborted after {len(picked)} seats")
                    return BookingResult(Outcome.SELECTION_ABORTED)
                grid.book(*seat)
                picked.append(seat)
        except BaseException:
            # no booking will ever own these seats
            self._release_all(grid, picked)
            logger.debug(f"Booking for {name} interrupted after {len(picked)} seats")
            raise

        booking = Booking(
            customer_name=name,
            movie_title=movie.title,
            seats=picked,
            total_price=len(picked) * movie.price_per_ticket,
            created_at=self.clock(),
        )
        self.ledger.append(booking)
        logger.info(
            f"Booked {booking.code}: {name} / {movie.title} / "
            f"{format_seats(picked)} / {booking.total_price:.2f}"
        )
        return BookingResult(Outcome.OK, booking=booking, saved=self.save())

    @staticmethod
    def _release_all(grid: SeatGrid, seats: List[Seat]) -> None:
        for row, col in seats:
            grid.release(row, col)

    @staticmethod
    def _pick_seat(grid: SeatGrid, seat_index: int, seat_selector: SeatSelector,
                   max_attempts: Optional[int]) -> Optional[Seat]:
        attempt = 0
        while max_attempts is None or attempt < max_attempts:
            seat = seat_selector(seat_index, attempt)
            if seat is None:
                return None
            row, col = seat
            if grid.is_available(row, col):
                return row, col
            attempt += 1
        return None

    def active_bookings(self, customer_name: str) -> List[Booking]:
        return self.ledger.active_for(customer_name)

    def cancel_booking(self, customer_name: str, booking_selector: BookingSelector) -> BookingResult:
        candidates = self.active_bookings(customer_name)
        if not candidates:
            logger.debug(f"No active bookings for {customer_name!r}")
            return BookingResult(Outcome.NO_ACTIVE_BOOKINGS)

        choice = booking_selector(candidates)
        if choice is None or not 0 <= choice < len(candidates):
            logger.debug(f"Cancellation rejected: booking choice {choice}")
            return BookingResult(Outcome.INVALID_SELECTION)

        booking = candidates[choice]
        refund = booking.refund_amount(self.refund_rate)
        booking.mark_cancelled()

        movie = self.catalog.find_by_title(booking.movie_title)
        if movie is None:
            logger.warning(
                f"Movie {booking.movie_title!r} of booking {booking.code} is not in the catalog; "
                "seats not released"
            )
        else:
            for row, col in booking.seats:
                movie.seats.release(row, col)

        logger.info(f"Cancelled {booking.code} for {booking.customer_name}, refund {refund:.2f}")
        return BookingResult(Outcome.OK, booking=booking, refund=refund, saved=self.save())

    def history(self) -> str:
        return self.ledger.render()

    def save(self) -> bool:
        """Writes catalog and ledger; False if either could not be saved."""
        if self.storage is None:
            return True
        saved = True
        try:
            self.storage.save_catalog(self.catalog)
        except PersistenceError as e:
            logger.error(f"Error saving movie data: {e}")
            saved = False
        try:
            self.storage.save_ledger(self.ledger)
        except PersistenceError as e:
            logger.error(f"Error saving booking data: {e}")
            saved = False
        return saved
