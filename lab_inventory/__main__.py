import sys
import threading
import time
import webbrowser

from .app import create_app
from .config import APP_NAME, APP_VERSION
from .errors import ConfigError


def main():
    try:
        app = create_app()
    except ConfigError as e:
        print(f"  {e}", file=sys.stderr)
        return 1
    host, port = app.config['HOST'], int(app.config['PORT'])
    url = f"http://{'localhost' if host in ('0.0.0.0', '127.0.0.1') else host}:{port}"
    print(f"  {APP_NAME} v{APP_VERSION}")
    print(f"  Backend: {app.config['SCRIPT_URL']}")
    print(f"  Opening {url}")

    def open_browser():
        time.sleep(1.0)
        webbrowser.open(url)
    threading.Thread(target=open_browser, daemon=True).start()
    app.run(debug=False, host=host, port=port)
    return 0


if __name__ == '__main__':
    sys.exit(main())
