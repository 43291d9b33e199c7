# tavla/config.py

import os

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

class Config:
    """Базовый класс конфигурации (безопасные значения)."""

    SECRET_KEY = 'tavla-dev-key-SHOULD-BE-CHANGED'

    LOG_FILE = 'application.log'
    STATS_LOG_FILE = 'match_stats.log'

    # --- Комнаты ---
    ROOM_ID_LENGTH = 6

    # --- Кубики ---
    # None = системная энтропия. Число = воспроизводимые броски (для отладки).
    DICE_SEED = None

    # --- Ограничение частоты запросов ---
    RATELIMIT_ENABLED = True
    STATE_RATE_LIMIT = "60 per minute"
    RATELIMIT_STORAGE_URI = "memory://"
