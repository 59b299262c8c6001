# data.py

from pathlib import Path
from typing import List, Tuple

BASE_DIR = Path(__file__).resolve().parent

DB_PATH = BASE_DIR / "cinema.db"
HISTORY_PATH = BASE_DIR / "booking_history.txt"
TICKETS_DIR = BASE_DIR / "tickets"

# Share of the ticket price returned on cancellation (15% fee).
REFUND_RATE: float = 0.85

DATE_FORMAT = "%d-%m-%Y %H:%M:%S"

# (title, price per ticket, rows, columns)
DEFAULT_MOVIES: List[Tuple[str, float, int, int]] = [
    ("Avengers: Endgame", 250.0, 5, 5),
    ("Inception", 200.0, 5, 5),
    ("Interstellar", 220.0, 5, 5),
]
