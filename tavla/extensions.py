# tavla/extensions.py
"""
Инициализация расширений Flask.

Экземпляры расширений (SocketIO, Limiter) создаются здесь, чтобы избежать
циклических импортов и подключить их в фабрике приложений (app factory).
"""

from flask_socketio import SocketIO
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# SocketIO для обработки WebSocket соединений
# cors_allowed_origins="*" - разрешает все источники.
# Для production следует указать конкретные домены.
socketio = SocketIO(cors_allowed_origins="*", compress=True)

# Limiter для ограничения частоты HTTP-запросов по IP клиента
limiter = Limiter(key_func=get_remote_address)
