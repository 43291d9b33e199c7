# tavla/globals.py

import datetime
from tavla.services.logging_service import log_event_to_file


def log_event(event_type, message, sid=None, game_id=None, extra_data=None):
    """
    Форматирует одно событие и дописывает его в общий лог-файл.
    Вызывается только внутри контекста приложения.
    """
    timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    log_entry = f"[{timestamp}] [TYPE: {event_type}]"

    if sid:
        log_entry += f" [SID: {sid}]"
    if game_id:
        log_entry += f" [RoomID: {game_id}]"
    if extra_data:
        log_entry += f" [Data: {extra_data}]"

    log_entry += f" | {message}\n"

    log_event_to_file(log_entry)
