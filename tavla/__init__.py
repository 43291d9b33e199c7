# tavla/__init__.py
import logging
from flask import Flask
from .extensions import socketio, limiter
from .globals import log_event

# Получаем логгер
logger = logging.getLogger(__name__)

def _configure_logging(app):
    """Настраивает файловый логгер."""
    file_handler = logging.FileHandler(app.config['LOG_FILE'], encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    app.logger.addHandler(file_handler)
    app.logger.setLevel(logging.INFO)
    logger.info("Файловый логгер настроен.")

def _init_extensions(app):
    """Инициализирует расширения Flask."""
    socketio.init_app(app)
    limiter.init_app(app)
    logger.info("Расширения Flask (SocketIO, Limiter) инициализированы.")

def _init_services(app, dice_source_factory=None):
    """Инициализирует и внедряет сервисы приложения."""
    from .services.game_service import GameService
    from .services.game_factory import GameFactory
    from .services.room_registry import RoomRegistry
    from .services.logging_service import log_match_stats

    registry = RoomRegistry(log_event_func=log_event)

    game_factory = GameFactory(
        config=app.config,
        log_event=log_event,
        log_stats=log_match_stats,
        dice_source_factory=dice_source_factory
    )

    game_service = GameService(
        registry=registry,
        factory=game_factory,
        log_event=log_event
    )

    # Прикрепляем главный сервис к экземпляру приложения
    app.game_service = game_service
    logger.info("Игровые сервисы (GameService, Factory, Registry) инициализированы.")

def _register_blueprints(app):
    """Регистрирует все маршруты API (Blueprints)."""
    from .api.main_routes import bp as main_bp
    app.register_blueprint(main_bp)

    logger.info("Blueprints (маршруты API) зарегистрированы.")

def _register_socketio_handlers():
    """
    Импортирует обработчики SocketIO для их регистрации.
    """
    # Этот импорт регистрирует обработчики в экземпляре socketio
    from .sockets import connection_handlers
    from .sockets import game_handlers
    logger.info("Обработчики SocketIO (connection, game) зарегистрированы.")

def create_app(test_config=None, dice_source_factory=None):
    """
    Фабрика приложений (Паттерн Application Factory).

    test_config - словарь, перекрывающий конфигурацию (для тестов).
    dice_source_factory - room_id -> источник бросков (для детерминированных партий).
    """

    app = Flask(__name__, instance_relative_config=True)

    # 1. Загрузка конфигурации
    app.config.from_object('tavla.config.Config')
    if test_config is None:
        app.config.from_pyfile('config.py', silent=True)
    else:
        app.config.update(test_config)

    # 2. Настройка логирования
    _configure_logging(app)

    # 3. Регистрация обработчиков SocketIO.
    # До init_app: обработчики копятся в socketio.handlers и
    # подключаются к серверу каждого нового приложения.
    _register_socketio_handlers()

    # 4. Инициализация расширений
    _init_extensions(app)

    # 5. Инициализация сервисов
    _init_services(app, dice_source_factory=dice_source_factory)

    # 6. Регистрация Blueprints (маршрутов API)
    _register_blueprints(app)

    app.logger.info("Приложение 'tavla-server' создано.")
    app.logger.info(f"Путь к логам: {app.config['LOG_FILE']}")

    return app, socketio
