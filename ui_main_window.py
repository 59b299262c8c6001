from typing import Dict, List, Optional

from loguru import logger
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QPalette
from PyQt5.QtWidgets import (
    QComboBox,
    QDialog,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QSizePolicy,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from booking_service import BookingResult, BookingService
from i18n import get_translations
from models import Booking, Movie, Seat, format_seats
from themes import THEMES, Theme, apply_theme_to_palette, seat_style
from ticket_pdf import generate_ticket_pdf


class MainWindow(QMainWindow):
    def __init__(self, service: BookingService, lang: str = "en"):
        super().__init__()

        self.service = service

        self.current_lang = lang
        self.translations = get_translations(self.current_lang)

        self.current_theme: Theme = THEMES["light"]

        self.labels: Dict[str, QLabel] = {}
        self.seat_buttons: Dict[Seat, QPushButton] = {}
        self.selected_seats: List[Seat] = []
        self.cancel_candidates: List[Booking] = []
        self.cancel_search_name = ""

        self.setMinimumSize(900, 600)
        self.resize(1200, 720)

        self._build_ui()
        self._apply_theme("light")
        self._update_texts()
        self._on_movie_changed(self.movie_combo.currentIndex())

    # ---------- helpers ----------

    def _t(self, key: str) -> str:
        return self.translations.get(key, key)

    def _current_movie(self) -> Optional[Movie]:
        return self.service.catalog.get(self.movie_combo.currentIndex())

    # ---------- UI BUILD ----------

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)

        main_layout = QHBoxLayout()
        main_layout.setContentsMargins(16, 12, 16, 12)
        main_layout.setSpacing(18)
        central.setLayout(main_layout)

        main_layout.addWidget(self._build_left_panel(), 0)
        main_layout.addWidget(self._build_right_panel(), 1)

        main_layout.setStretch(0, 2)   # form
        main_layout.setStretch(1, 7)   # seats

    def _build_left_panel(self) -> QGroupBox:
        self.reservation_group = QGroupBox(self._t("reservation_group"))
        self._apply_card_shadow(self.reservation_group)
        box = self.reservation_group
        layout = QVBoxLayout()
        layout.setSpacing(10)
        box.setLayout(layout)

        self.title_label = QLabel(self._t("app_title"))
        self.title_label.setStyleSheet("font-size: 18px; font-weight: 600;")
        layout.addWidget(self.title_label)

        self.subtitle_label = QLabel(self._t("subtitle"))
        self.subtitle_label.setStyleSheet("font-size: 11px; color: #6b7280;")
        layout.addWidget(self.subtitle_label)

        self.movie_combo = QComboBox()
        for movie in self.service.list_movies():
            self.movie_combo.addItem(movie.title)
        self.movie_combo.currentIndexChanged.connect(self._on_movie_changed)
        layout.addWidget(self._labeled_widget("movie_label", self.movie_combo))

        self.client_name_edit = QLineEdit()
        self.client_name_edit.setPlaceholderText(self._t("name_placeholder"))
        self.client_name_edit.textChanged.connect(self._update_summary)
        layout.addWidget(self._labeled_widget("client_label", self.client_name_edit))

        # Language group
        self.lang_group = QGroupBox(self._t("lang_group"))
        lang_row = QHBoxLayout()
        lang_row.setSpacing(6)
        self.lang_en_btn = QPushButton(self._t("lang_en"))
        self.lang_bg_btn = QPushButton(self._t("lang_bg"))
        for btn, code in [(self.lang_en_btn, "en"), (self.lang_bg_btn, "bg")]:
            btn.setCheckable(True)
            btn.clicked.connect(lambda checked, c=code: self._set_language(c))
            lang_row.addWidget(btn)
        self.lang_group.setLayout(lang_row)
        layout.addWidget(self.lang_group)

        # Theme group
        self.theme_group = QGroupBox(self._t("theme_group"))
        theme_row = QHBoxLayout()
        theme_row.setSpacing(6)
        self.theme_buttons: Dict[str, QPushButton] = {}
        for name in THEMES:
            btn = QPushButton(name.capitalize())
            btn.setCheckable(True)
            btn.clicked.connect(lambda checked, n=name: self._apply_theme(n))
            theme_row.addWidget(btn)
            self.theme_buttons[name] = btn
        self.theme_group.setLayout(theme_row)
        layout.addWidget(self.theme_group)

        # Summary
        self.summary_text = QTextEdit()
        self.summary_text.setReadOnly(True)
        self.summary_text.setMinimumHeight(110)
        layout.addWidget(self._labeled_widget("summary_label", self.summary_text))

        buttons_row = QWidget()
        buttons_layout = QHBoxLayout()
        buttons_layout.setContentsMargins(0, 0, 0, 0)
        buttons_layout.setSpacing(8)

        self.confirm_btn = QPushButton(self._t("confirm_button"))
        self.confirm_btn.setEnabled(False)
        self.confirm_btn.clicked.connect(self._handle_booking)
        self.confirm_btn.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)

        self.history_btn = QPushButton(self._t("history_button"))
        self.history_btn.setObjectName("secondaryButton")
        self.history_btn.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
        self.history_btn.clicked.connect(self._open_history_dialog)

        buttons_layout.addWidget(self.confirm_btn)
        buttons_layout.addWidget(self.history_btn)
        buttons_row.setLayout(buttons_layout)
        layout.addWidget(buttons_row)

        # Cancel booking section
        self.cancel_group = QGroupBox(self._t("cancel_group"))
        self._apply_card_shadow(self.cancel_group)
        cg_layout = QVBoxLayout()
        self.cancel_name_edit = QLineEdit()
        self.cancel_name_edit.setPlaceholderText(self._t("name_placeholder"))
        self.cancel_name_edit.textChanged.connect(self._clear_cancel_candidates)
        self.find_btn = QPushButton(self._t("find_button"))
        self.find_btn.setObjectName("secondaryButton")
        self.find_btn.clicked.connect(self._handle_find_bookings)
        self.cancel_combo = QComboBox()
        self.cancel_combo.setEnabled(False)
        self.cancel_btn = QPushButton(self._t("cancel_button"))
        self.cancel_btn.setObjectName("dangerButton")
        self.cancel_btn.setEnabled(False)
        self.cancel_btn.clicked.connect(self._handle_cancel_booking)
        for widget in (self.cancel_name_edit, self.find_btn, self.cancel_combo, self.cancel_btn):
            cg_layout.addWidget(widget)
        self.cancel_group.setLayout(cg_layout)
        layout.addWidget(self.cancel_group)

        self.status_label = QLabel("")
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        layout.addStretch(1)
        return box

    def _build_right_panel(self) -> QGroupBox:
        self.seat_group = QGroupBox(self._t("seat_group"))
        self._apply_card_shadow(self.seat_group)
        box = self.seat_group
        layout = QVBoxLayout()
        layout.setSpacing(8)
        box.setLayout(layout)

        self.seat_subtitle_label = QLabel(self._t("seat_subtitle"))
        self.seat_subtitle_label.setStyleSheet("font-size: 11px;")
        layout.addWidget(self.seat_subtitle_label)

        self.seat_grid = QGridLayout()
        self.seat_grid.setContentsMargins(12, 8, 12, 12)
        self.seat_grid.setHorizontalSpacing(6)
        self.seat_grid.setVerticalSpacing(6)
        layout.addLayout(self.seat_grid)

        layout.addStretch(1)
        return box

    def _build_seat_buttons(self, movie: Movie) -> None:
        while self.seat_grid.count():
            item = self.seat_grid.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        self.seat_buttons.clear()
        self.selected_seats.clear()

        grid = movie.seats
        screen_label = QLabel("S C R E E N")
        screen_label.setAlignment(Qt.AlignCenter)
        screen_label.setStyleSheet("font-size: 11px; letter-spacing: 3px;")
        self.seat_grid.addWidget(screen_label, 0, 0, 1, grid.cols + 1)

        for row in range(grid.rows):
            row_label_widget = QLabel(str(row + 1))
            row_label_widget.setAlignment(Qt.AlignCenter)
            self.seat_grid.addWidget(row_label_widget, row + 1, 0)

            for col in range(grid.cols):
                btn = QPushButton(str(col + 1))
                btn.setProperty("seat_row", row)
                btn.setProperty("seat_col", col)
                btn.clicked.connect(self._on_seat_clicked)
                btn.setMinimumSize(30, 26)
                btn.setMaximumHeight(32)
                btn.setSizePolicy(QSizePolicy.Preferred, QSizePolicy.Preferred)

                self.seat_grid.addWidget(btn, row + 1, col + 1)
                self.seat_buttons[(row, col)] = btn

        self._refresh_seats()

    def _refresh_seats(self) -> None:
        movie = self._current_movie()
        if movie is None:
            return
        for (row, col), btn in self.seat_buttons.items():
            taken = movie.seats.is_booked(row, col)
            if taken and (row, col) in self.selected_seats:
                self.selected_seats.remove((row, col))
            btn.setEnabled(not taken)
            btn.setStyleSheet(
                seat_style(self.current_theme, selected=(row, col) in self.selected_seats, taken=taken)
            )

    # ---------- LABEL HELPERS ----------

    def _labeled_widget(self, label_key: str, widget: QWidget) -> QWidget:
        container = QWidget()
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        lbl = QLabel(self._t(label_key))
        lbl.setStyleSheet("font-size: 11px;")
        layout.addWidget(lbl)
        layout.addWidget(widget)
        container.setLayout(layout)

        self.labels[label_key] = lbl
        return container

    def _apply_card_shadow(self, widget: QWidget) -> None:
        effect = QGraphicsDropShadowEffect(self)
        effect.setBlurRadius(24)
        effect.setOffset(0, 10)
        effect.setColor(QColor(15, 23, 42, 110))
        widget.setGraphicsEffect(effect)

    # ---------- THEME & LANGUAGE ----------

    def _apply_theme(self, theme_name: str) -> None:
        theme = THEMES.get(theme_name, THEMES["light"])
        self.current_theme = theme

        palette: QPalette = self.palette()
        apply_theme_to_palette(theme, palette)
        self.setPalette(palette)

        self.setStyleSheet(
            f"""
            QMainWindow {{
                background-color: {theme.panel_bg};
            }}
            QGroupBox {{
                border: 1px solid {theme.border};
                border-radius: 16px;
                margin-top: 10px;
                background-color: {theme.panel_bg};
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 14px;
                padding: 0 6px;
                color: {theme.muted_text};
                font-size: 11px;
            }}
            QLabel {{
                color: {theme.text};
            }}
            QLineEdit, QComboBox, QTextEdit {{
                background-color: {theme.panel_bg};
                color: {theme.text};
                border: 1px solid {theme.border};
                border-radius: 10px;
                padding: 6px 9px;
                selection-background-color: {theme.accent};
                selection-color: #ffffff;
            }}
            QTextEdit {{
                font-family: 'Consolas', 'Menlo', 'Courier New', monospace;
                font-size: 11px;
            }}
            QPushButton {{
                background-color: {theme.accent};
                color: white;
                border-radius: 999px;
                padding: 6px 14px;
                border: none;
                font-size: 11px;
            }}
            QPushButton:disabled {{
                background-color: {theme.accent_soft};
                color: {theme.muted_text};
            }}
            QPushButton#secondaryButton {{
                background-color: transparent;
                color: {theme.text};
                border: 1px solid {theme.border};
            }}
            QPushButton#dangerButton {{
                background-color: #dc2626;
            }}
            """
        )

        for name, btn in self.theme_buttons.items():
            btn.setChecked(name == theme.name)

        self._refresh_seats()

    def _set_language(self, lang_code: str) -> None:
        self.current_lang = lang_code
        self.translations = get_translations(lang_code)
        self._update_texts()

    def _update_texts(self) -> None:
        self.setWindowTitle(self._t("app_title"))
        self.reservation_group.setTitle(self._t("reservation_group"))
        self.seat_group.setTitle(self._t("seat_group"))
        self.cancel_group.setTitle(self._t("cancel_group"))
        self.theme_group.setTitle(self._t("theme_group"))
        self.lang_group.setTitle(self._t("lang_group"))

        self.title_label.setText(self._t("app_title"))
        self.subtitle_label.setText(self._t("subtitle"))
        self.seat_subtitle_label.setText(self._t("seat_subtitle"))

        for key, lbl in self.labels.items():
            lbl.setText(self._t(key))

        self.confirm_btn.setText(self._t("confirm_button"))
        self.history_btn.setText(self._t("history_button"))
        self.find_btn.setText(self._t("find_button"))
        self.cancel_btn.setText(self._t("cancel_button"))
        self.lang_en_btn.setText(self._t("lang_en"))
        self.lang_bg_btn.setText(self._t("lang_bg"))
        self.client_name_edit.setPlaceholderText(self._t("name_placeholder"))
        self.cancel_name_edit.setPlaceholderText(self._t("name_placeholder"))

        self.lang_en_btn.setChecked(self.current_lang == "en")
        self.lang_bg_btn.setChecked(self.current_lang == "bg")

        self._update_summary()

    # ---------- SIGNAL HANDLERS ----------

    def _on_movie_changed(self, index: int) -> None:
        movie = self._current_movie()
        if movie is not None:
            self._build_seat_buttons(movie)
        self._update_summary()

    def _on_seat_clicked(self) -> None:
        btn: QPushButton = self.sender()  # type: ignore
        seat: Seat = (btn.property("seat_row"), btn.property("seat_col"))

        # keep click order, the booking records seats in selection order
        if seat in self.selected_seats:
            self.selected_seats.remove(seat)
        else:
            self.selected_seats.append(seat)
        self._refresh_seats()
        self._update_summary()

    # ---------- SUMMARY & BOOKING ----------

    def _update_summary(self) -> None:
        movie = self._current_movie()
        client_name = self.client_name_edit.text().strip() or "—"
        seats_str = format_seats(self.selected_seats) or "—"

        if movie is None:
            price_str = total_str = "—"
        else:
            price_str = f"{movie.price_per_ticket:.2f}"
            total_str = f"{movie.price_per_ticket * len(self.selected_seats):.2f}"

        self.summary_text.setPlainText(
            f"{self._t('movie_label')}: {movie.title if movie else '—'}\n"
            f"{self._t('client_summary')}: {client_name}\n"
            f"{self._t('seats_summary')}: {seats_str}\n"
            f"{self._t('price_summary')}: {price_str}\n"
            f"{self._t('total_summary')}: {total_str}\n"
        )
        self.confirm_btn.setEnabled(
            movie is not None
            and bool(self.client_name_edit.text().strip())
            and bool(self.selected_seats)
        )

    def _handle_booking(self) -> None:
        movie = self._current_movie()
        if movie is None:
            self.status_label.setText(self._t("status_invalid_selection"))
            return
        if not self.selected_seats:
            self.status_label.setText(self._t("status_missing_seats"))
            return

        seats = list(self.selected_seats)

        def pick_clicked_seat(seat_index: int, attempt: int) -> Optional[Seat]:
            # a clicked seat that turns out taken ends the request
            return seats[seat_index] if attempt == 0 else None

        result = self.service.create_booking(
            self.client_name_edit.text(), movie, len(seats), pick_clicked_seat
        )
        text = self._result_text(result)

        if result.ok:
            try:
                pdf_path = generate_ticket_pdf(result.booking, movie.price_per_ticket, open_after=True)
                text = f"{text}\nPDF: {pdf_path}"
            except OSError as e:
                logger.error(f"Could not write ticket PDF: {e}")
                text = f"{text}\n(Could not write PDF: {e})"

        self.status_label.setText(text)
        self.selected_seats.clear()
        self._refresh_seats()
        self._update_summary()

    # ---------- CANCEL BOOKING ----------

    def _clear_cancel_candidates(self) -> None:
        # the listed bookings belong to the name that was searched, not the edited one
        self.cancel_candidates = []
        self.cancel_search_name = ""
        self.cancel_combo.clear()
        self.cancel_combo.setEnabled(False)
        self.cancel_btn.setEnabled(False)

    def _handle_find_bookings(self) -> None:
        name = self.cancel_name_edit.text()
        self.cancel_search_name = name
        self.cancel_candidates = self.service.active_bookings(name)

        self.cancel_combo.clear()
        for booking in self.cancel_candidates:
            self.cancel_combo.addItem(
                f"{booking.code} · {booking.movie_title} · {format_seats(booking.seats)}"
            )
        has_any = bool(self.cancel_candidates)
        self.cancel_combo.setEnabled(has_any)
        self.cancel_btn.setEnabled(has_any)
        if not has_any:
            self.status_label.setText(self._t("status_no_active_bookings").format(client=name.strip()))

    def _handle_cancel_booking(self) -> None:
        name = self.cancel_search_name
        index = self.cancel_combo.currentIndex()
        chosen = self.cancel_candidates[index] if 0 <= index < len(self.cancel_candidates) else None

        def pick_listed_booking(candidates: List[Booking]) -> Optional[int]:
            for i, booking in enumerate(candidates):
                if booking is chosen:
                    return i
            return None

        result = self.service.cancel_booking(name, pick_listed_booking)

        self._refresh_seats()
        self._handle_find_bookings()
        self.status_label.setText(self._result_text(result, client=name.strip()))

    def _result_text(self, result: BookingResult, client: str = "") -> str:
        if not result.ok:
            return self._t(f"status_{result.outcome.value}").format(client=client)

        booking = result.booking
        if result.refund is None:
            text = self._t("status_booked").format(
                movie=booking.movie_title,
                client=booking.customer_name,
                seats=format_seats(booking.seats),
                total=booking.total_price,
                code=booking.code,
            )
        else:
            text = self._t("status_cancelled").format(code=booking.code, refund=result.refund)
        if not result.saved:
            text = f"{text}\n{self._t('status_not_saved')}"
        return text

    # ---------- HISTORY ----------

    def _open_history_dialog(self) -> None:
        dlg = HistoryDialog(self.service.history(), self, lang=self.current_lang)
        dlg.exec_()


class HistoryDialog(QDialog):
    def __init__(self, history: str, parent=None, lang: str = "en"):
        super().__init__(parent)
        self.translations = get_translations(lang)

        self.setWindowTitle(self.translations.get("history_title", "Booking History"))
        self.resize(460, 420)

        layout = QVBoxLayout()
        self.text = QTextEdit()
        self.text.setReadOnly(True)
        self.text.setPlainText(history or self.translations.get("status_no_history", ""))
        layout.addWidget(self.text)
        self.setLayout(layout)
