import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from talkalong.api.analysis_routes import analysis_api
from talkalong.api.routes import api
from talkalong.api.services import EXTENSION_KEY, build_services
from talkalong.api.stt_routes import stt_api
from talkalong.config import Config, configure_logging

logger = logging.getLogger(__name__)


def create_app(config=Config, services=None):
    """
    Application factory.

    Args:
        config: Configuration class or object.
        services: Prebuilt Services (tests); built from config otherwise.
    """
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_CONTENT_LENGTH
    CORS(app, origins=config.get_cors_origins())

    app.extensions[EXTENSION_KEY] = services or build_services(config)

    app.register_blueprint(api)
    app.register_blueprint(analysis_api)
    app.register_blueprint(stt_api)

    @app.after_request
    def log_request(response):
        logger.info("%s %s %s", request.method, request.path, response.status_code)
        return response

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500

    return app


if __name__ == "__main__":
    configure_logging()
    app = create_app()
    app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)
