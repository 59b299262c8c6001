import os
import subprocess
import sys
from pathlib import Path

from loguru import logger
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A6, landscape
from reportlab.pdfgen import canvas

from data import DATE_FORMAT, TICKETS_DIR
from models import Booking, format_seats


def generate_ticket_pdf(
    booking: Booking,
    price_per_ticket: float,
    tickets_dir: Path = TICKETS_DIR,
    open_after: bool = False,
) -> Path:
    """
    Draws a one-page A6 ticket for the booking and returns its path.
    The file is named after the booking code.
    """

    tickets_dir = Path(tickets_dir)
    tickets_dir.mkdir(parents=True, exist_ok=True)

    file_path = tickets_dir / f"{booking.code}.pdf"

    # Size: A6 landscape
    page_size = landscape(A6)
    width, height = page_size

    c = canvas.Canvas(str(file_path), pagesize=page_size)

    bg_page = HexColor("#e5e7eb")
    card_bg = HexColor("#ffffff")
    border_color = HexColor("#d1d5db")
    accent = HexColor("#2563eb")
    accent_soft = HexColor("#dbeafe")
    text_main = HexColor("#111827")
    text_muted = HexColor("#6b7280")

    c.setFillColor(bg_page)
    c.rect(0, 0, width, height, fill=1, stroke=0)

    # white card in the middle
    margin = 10
    card_x = margin
    card_y = margin
    card_width = width - margin * 2
    card_height = height - margin * 2

    c.setFillColor(card_bg)
    c.setStrokeColor(border_color)
    c.setLineWidth(1)
    c.roundRect(card_x, card_y, card_width, card_height, 10, fill=1, stroke=1)

    header_height = 24
    c.setFillColor(accent_soft)
    c.setStrokeColor(accent_soft)
    c.roundRect(
        card_x,
        card_y + card_height - header_height,
        card_width,
        header_height,
        10,
        fill=1,
        stroke=0,
    )

    c.setFillColor(accent)
    c.setFont("Helvetica-Bold", 11)
    c.drawString(
        card_x + 14,
        card_y + card_height - header_height + 7,
        "MOVIE TICKET",
    )

    c.setFillColor(text_main)
    c.setFont("Helvetica-Bold", 16)
    c.drawRightString(
        card_x + card_width - 14,
        card_y + card_height - header_height + 8,
        booking.code,
    )

    content_left = card_x + 16
    content_right = card_x + card_width - 16
    y = card_y + card_height - header_height - 14

    fields = [
        ("Movie", booking.movie_title[:40], "Helvetica-Bold", 12),
        ("Seats (row, col)", format_seats(booking.seats)[:50], "Helvetica", 11),
        (
            "Price",
            f"{booking.seat_count} x {price_per_ticket:.2f} = {booking.total_price:.2f}",
            "Helvetica",
            11,
        ),
        ("Client", booking.customer_name[:40], "Helvetica", 11),
    ]
    for caption, value, font, size in fields:
        c.setFillColor(text_muted)
        c.setFont("Helvetica", 8)
        c.drawString(content_left, y, caption)
        y -= 13
        c.setFillColor(text_main)
        c.setFont(font, size)
        c.drawString(content_left, y, value)
        y -= 18

    footer_y = card_y + 12
    c.setFillColor(text_muted)
    c.setFont("Helvetica", 7)
    c.drawString(content_left, footer_y, f"Booked: {booking.created_at.strftime(DATE_FORMAT)}")
    c.drawRightString(content_right, footer_y, "Movie Ticket Booking")

    c.showPage()
    c.save()
    logger.debug(f"Ticket written to {file_path}")

    if open_after:
        open_with_default_viewer(file_path)

    return file_path


def open_with_default_viewer(file_path: Path) -> None:
    """Opens the file with the system's default tool (Windows / macOS / Linux)."""
    path_str = str(file_path)
    try:
        if sys.platform.startswith("win"):
            os.startfile(path_str)  # Windows
        elif sys.platform == "darwin":
            subprocess.Popen(["open", path_str])
        else:
            subprocess.Popen(["xdg-open", path_str])
    except OSError as e:
        logger.warning(f"Could not open {path_str} automatically: {e}")
