#!/usr/bin/env python3
from talkalong.api.app import create_app
from talkalong.config import Config, configure_logging

if __name__ == "__main__":
    configure_logging()
    app = create_app()
    print(f"Starting server at http://{Config.HOST}:{Config.PORT}")
    app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)
