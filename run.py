import eventlet
eventlet.monkey_patch()

# 2. Обычные импорты
import argparse
from tavla import create_app

print("[run.py] Eventlet monkey-patch применен.")

# 3. Создаем приложение
app, socketio = create_app()

if __name__ == '__main__':

    parser = argparse.ArgumentParser(description='Запуск сервера комнат для нард.')

    parser.add_argument(
        '-e', '--env',
        default='local',
        choices=['local', 'prod'],
        help='Режим запуска: local (отладка, 127.0.0.1:4999) или prod (0.0.0.0:5000).'
    )

    args = parser.parse_args()

    if args.env == 'prod':
        print("[run.py] Запуск в режиме PRODUCTION на 0.0.0.0:5000...")
        socketio.run(app, host='0.0.0.0', port=5000, debug=False)

    else:
        print("[run.py] Запуск в режиме LOCAL на 127.0.0.1:4999 (debug=True)...")
        socketio.run(app,
                     host='127.0.0.1',
                     port=4999,
                     debug=True,
                     allow_unsafe_werkzeug=True  # debug=True под eventlet
                    )
