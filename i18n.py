# i18n.py

from typing import Dict

LANG_EN: Dict[str, str] = {
    "app_title": "Movie Ticket Booking",
    "reservation_group": "Reservation",
    "seat_group": "Seat map",
    "cancel_group": "Cancel booking",
    "theme_group": "Theme",
    "lang_group": "Language",

    "subtitle": "Select a movie, enter the name, click seats.",
    "seat_subtitle": "Click seats to select. Green = selected, gray = booked.",

    "movie_label": "Movie",
    "client_label": "Client name",
    "summary_label": "Summary",
    "client_summary": "Client",
    "seats_summary": "Seats",
    "price_summary": "Price per ticket",
    "total_summary": "Total",

    "confirm_button": "Confirm booking",
    "find_button": "Find bookings",
    "cancel_button": "Cancel booking",
    "history_button": "History",

    "lang_en": "EN",
    "lang_bg": "BG",

    # console menu
    "menu_title": "MOVIE TICKET BOOKING SYSTEM",
    "menu_book": "1. View Movies & Book Tickets",
    "menu_cancel": "2. Cancel Booking",
    "menu_history": "3. Display Booking History",
    "menu_exit": "4. Exit",
    "prompt_choice": "Enter your choice: ",
    "prompt_number": "Enter a valid number: ",
    "prompt_movie": "Enter movie number: ",
    "prompt_name": "Enter your name: ",
    "prompt_tickets": "Enter number of tickets: ",
    "prompt_seat": "Select seat {n} (row and column, 1-{rows} / 1-{cols}): ",
    "prompt_cancel_name": "Enter your name for cancellation: ",
    "prompt_booking": "Enter booking number to cancel: ",
    "available_movies": "Available Movies:",
    "seat_layout": "Seat Layout (O = available, X = booked):",
    "active_bookings": "Your Active Bookings:",
    "history_title": "Booking History:",
    "booking_line": "{n}. {movie} | Seats: {count}",
    "movie_line": "{n}. {title} ({price:.2f})",
    "invalid_choice": "Invalid choice! Try again.",
    "invalid_movie": "Invalid movie choice!",
    "seat_unavailable": "Seat unavailable or invalid. Please try again.",
    "goodbye": "Data saved. Exiting... Goodbye!",

    # results
    "status_booked": (
        "Booking confirmed: {movie} | Client: {client}\n"
        "Seats: {seats} | Total: {total:.2f} | Code: {code}"
    ),
    "status_cancelled": "Booking {code} cancelled. Refund amount: {refund:.2f}",
    "status_empty_name": "Client name is required.",
    "status_invalid_selection": "Invalid selection!",
    "status_insufficient_capacity": "Not enough free seats for this movie.",
    "status_selection_aborted": "Seat selection cancelled, nothing was booked.",
    "status_no_active_bookings": "No active bookings found for {client}.",
    "status_missing_seats": "Please select at least one seat.",
    "status_not_saved": "Warning: the change could not be saved to disk.",
    "status_no_history": "No booking history found.",
    "status_no_bookings": "No existing bookings found.",
    "name_placeholder": "Full name",
}

LANG_BG: Dict[str, str] = {
    "app_title": "Резервация на кино билети",
    "reservation_group": "Резервация",
    "seat_group": "Салон",
    "cancel_group": "Отказ от резервация",
    "theme_group": "Тема",
    "lang_group": "Език",

    "subtitle": "Избери филм, въведи име, кликни върху местата.",
    "seat_subtitle": "Кликни върху местата за избор. Зелено = избрано, сиво = заето.",

    "movie_label": "Филм",
    "client_label": "Име на клиент",
    "summary_label": "Обобщение",
    "client_summary": "Клиент",
    "seats_summary": "Места",
    "price_summary": "Цена на билет",
    "total_summary": "Общо",

    "confirm_button": "Потвърди",
    "find_button": "Търси резервации",
    "cancel_button": "Откажи резервация",
    "history_button": "История",

    "lang_en": "EN",
    "lang_bg": "BG",

    "menu_title": "СИСТЕМА ЗА КИНО БИЛЕТИ",
    "menu_book": "1. Филми и резервация",
    "menu_cancel": "2. Отказ от резервация",
    "menu_history": "3. История на резервациите",
    "menu_exit": "4. Изход",
    "prompt_choice": "Избор: ",
    "prompt_number": "Въведи валидно число: ",
    "prompt_movie": "Номер на филм: ",
    "prompt_name": "Име: ",
    "prompt_tickets": "Брой билети: ",
    "prompt_seat": "Място {n} (ред и колона, 1-{rows} / 1-{cols}): ",
    "prompt_cancel_name": "Име за отказ: ",
    "prompt_booking": "Номер на резервация за отказ: ",
    "available_movies": "Филми:",
    "seat_layout": "Салон (O = свободно, X = заето):",
    "active_bookings": "Активни резервации:",
    "history_title": "История на резервациите:",
    "booking_line": "{n}. {movie} | Места: {count}",
    "movie_line": "{n}. {title} ({price:.2f})",
    "invalid_choice": "Невалиден избор! Опитай пак.",
    "invalid_movie": "Невалиден филм!",
    "seat_unavailable": "Мястото е заето или невалидно. Опитай пак.",
    "goodbye": "Данните са записани. Довиждане!",

    "status_booked": (
        "Резервацията е потвърдена: {movie} | Клиент: {client}\n"
        "Места: {seats} | Общо: {total:.2f} | Код: {code}"
    ),
    "status_cancelled": "Резервация {code} е отказана. Сума за връщане: {refund:.2f}",
    "status_empty_name": "Въведи име на клиента.",
    "status_invalid_selection": "Невалиден избор!",
    "status_insufficient_capacity": "Няма достатъчно свободни места за този филм.",
    "status_selection_aborted": "Изборът на места е прекратен, нищо не е резервирано.",
    "status_no_active_bookings": "Няма активни резервации за {client}.",
    "status_missing_seats": "Избери поне едно място.",
    "status_not_saved": "Внимание: промяната не беше записана на диска.",
    "status_no_history": "Няма история на резервациите.",
    "status_no_bookings": "Няма направени резервации.",
    "name_placeholder": "Име и фамилия",
}

LANGS = {
    "en": LANG_EN,
    "bg": LANG_BG,
}


def get_translations(lang_code: str) -> Dict[str, str]:
    return LANGS.get(lang_code, LANG_EN)
