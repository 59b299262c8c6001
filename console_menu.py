# console_menu.py

from typing import Callable, Dict, List, Optional

from loguru import logger

from booking_service import BookingResult, BookingService
from i18n import get_translations
from models import Booking, Movie, Seat, format_seats
from storage import PersistenceError, Storage


class ConsoleMenu:
    """
    Text menu: book, cancel, history, exit.
    All console access goes through input_fn / output_fn.
    """

    def __init__(
        self,
        service: BookingService,
        storage: Optional[Storage] = None,
        translations: Optional[Dict[str, str]] = None,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.service = service
        self.storage = storage
        self.translations = translations or get_translations("en")
        self.input_fn = input_fn
        self.output_fn = output_fn

    def _t(self, key: str) -> str:
        return self.translations.get(key, key)

    def say(self, text: str = "") -> None:
        self.output_fn(text)

    # ---------- INPUT ----------

    def read_text(self, prompt: str) -> str:
        return self.input_fn(prompt).strip()

    def read_int(self, prompt: str) -> int:
        text = self.input_fn(prompt)
        while True:
            try:
                return int(text.strip())
            except ValueError:
                text = self.input_fn(self._t("prompt_number"))

    def read_seat(self, prompt: str) -> Seat:
        """Reads "row col" (or "row,col"), 1-indexed, returns it 0-indexed."""
        text = self.input_fn(prompt)
        while True:
            parts = text.replace(",", " ").split()
            if len(parts) == 2:
                try:
                    return int(parts[0]) - 1, int(parts[1]) - 1
                except ValueError:
                    pass
            text = self.input_fn(self._t("prompt_number"))

    # ---------- MENU ----------

    def run(self) -> None:
        while True:
            self.say()
            self.say(self._t("menu_title"))
            for key in ("menu_book", "menu_cancel", "menu_history", "menu_exit"):
                self.say(self._t(key))
            # closed input or Ctrl-C at any prompt ends the session like "Exit"
            try:
                choice = self.read_int(self._t("prompt_choice"))
                if choice == 1:
                    self.book()
                elif choice == 2:
                    self.cancel()
                elif choice == 3:
                    self.show_history()
                elif choice == 4:
                    break
                else:
                    self.say(self._t("invalid_choice"))
            except (EOFError, KeyboardInterrupt):
                break

        self.service.save()
        self.say(self._t("goodbye"))

    def show_seats(self, movie: Movie) -> None:
        self.say()
        self.say(self._t("seat_layout"))
        for row in movie.seats.render():
            self.say(" ".join(row))

    def book(self) -> Optional[BookingResult]:
        movies = self.service.list_movies()
        self.say()
        self.say(self._t("available_movies"))
        for i, movie in enumerate(movies, start=1):
            self.say(self._t("movie_line").format(n=i, title=movie.title, price=movie.price_per_ticket))

        movie = self.service.catalog.get(self.read_int(self._t("prompt_movie")) - 1)
        if movie is None:
            self.say(self._t("invalid_movie"))
            return None

        self.show_seats(movie)
        name = self.read_text(self._t("prompt_name"))
        count = self.read_int(self._t("prompt_tickets"))
        grid = movie.seats

        def select_seat(seat_index: int, attempt: int) -> Seat:
            if attempt:
                self.say(self._t("seat_unavailable"))
            prompt = self._t("prompt_seat").format(n=seat_index + 1, rows=grid.rows, cols=grid.cols)
            return self.read_seat(prompt)

        result = self.service.create_booking(name, movie, count, select_seat)
        self._report(result)
        return result

    def cancel(self) -> Optional[BookingResult]:
        if not len(self.service.ledger):
            self.say(self._t("status_no_bookings"))
            return None

        name = self.read_text(self._t("prompt_cancel_name"))

        def select_booking(candidates: List[Booking]) -> int:
            self.say()
            self.say(self._t("active_bookings"))
            for i, booking in enumerate(candidates, start=1):
                self.say(
                    self._t("booking_line").format(
                        n=i, movie=booking.movie_title, count=booking.seat_count
                    )
                )
            return self.read_int(self._t("prompt_booking")) - 1

        result = self.service.cancel_booking(name, select_booking)
        self._report(result, client=name)
        return result

    def show_history(self) -> None:
        text = self._history_text()
        if not text:
            self.say(self._t("status_no_history"))
            return
        self.say()
        self.say(self._t("history_title"))
        self.say("---------------------------")
        self.say(text.rstrip("\n"))

    def _history_text(self) -> Optional[str]:
        if self.storage is None:
            return self.service.history()
        try:
            return self.storage.read_history()
        except PersistenceError as e:
            logger.error(str(e))
            return self.service.history()

    def _report(self, result: BookingResult, client: str = "") -> None:
        if not result.ok:
            self.say(self._t(f"status_{result.outcome.value}").format(client=client))
            return

        booking = result.booking
        if result.refund is None:
            self.say(
                self._t("status_booked").format(
                    movie=booking.movie_title,
                    client=booking.customer_name,
                    seats=format_seats(booking.seats),
                    total=booking.total_price,
                    code=booking.code,
                )
            )
        else:
            self.say(self._t("status_cancelled").format(code=booking.code, refund=result.refund))
        if not result.saved:
            self.say(self._t("status_not_saved"))
