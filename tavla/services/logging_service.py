# tavla/services/logging_service.py

import json
import datetime
import logging
import threading
from flask import current_app

logger = logging.getLogger(__name__)

# Один замок на оба файла: строки разных комнат не перемешиваются
file_lock = threading.RLock()


def _append_line(config_key, line):
    """Дописывает строку в файл из app.config[config_key]. Ошибка диска не роняет ход."""
    path = current_app.config[config_key]

    with file_lock:
        try:
            with open(path, 'a', encoding='utf-8') as f:
                f.write(line if line.endswith('\n') else line + '\n')
        except OSError as e:
            logger.error(f"Не удалось записать в {config_key} ({path}): {e}")


def log_match_stats(stats_data):
    """
    Одна JSON-строка на завершенную партию в STATS_LOG_FILE.
    Исходный словарь не меняется.
    """
    record = dict(stats_data)
    record.setdefault('timestamp', datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S"))
    _append_line('STATS_LOG_FILE', json.dumps(record, ensure_ascii=False, sort_keys=True))


def log_event_to_file(log_entry):
    """Строка события (уже отформатированная в globals.log_event) в LOG_FILE."""
    _append_line('LOG_FILE', log_entry)
