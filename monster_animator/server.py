"""
Flask application that hands the Gemini API key to the front end and serves
the built single-page app.

Routes:
- GET /api/get-key returns {"apiKey": ...}, or a 500 with {"error": ...}
  when GEMINI_API_KEY is not configured.
- Everything else is looked up in the build directory, falling back to
  index.html so client-side routing keeps working.
"""

import logging
from pathlib import Path

from flask import Flask, jsonify, send_from_directory

from .config import AppConfig, load_config

logger = logging.getLogger(__name__)

MISSING_KEY_ERROR = "GEMINI_API_KEY is not configured on the server."
MISSING_BUILD_MESSAGE = "Application build not found. Please ensure `npm run build` was successful."


def create_app(config: AppConfig | None = None) -> Flask:
    config = config or load_config()
    build_path = Path(config.build_dir).resolve()

    if config.gemini_api_key:
        logger.info("Successfully loaded GEMINI_API_KEY from environment variables.")
    else:
        # The server still starts so the front end can show the error.
        logger.error("GEMINI_API_KEY environment variable is not set. The application will not work.")

    app = Flask(__name__, static_folder=None)

    # Registered before the catch-all route below.
    @app.route("/api/get-key", methods=["GET"])
    def get_key():
        logger.info("Received a request for the API key at /api/get-key.")
        if config.gemini_api_key:
            return jsonify({"apiKey": config.gemini_api_key})
        logger.error("Could not serve API key: %s", MISSING_KEY_ERROR)
        return jsonify({"error": MISSING_KEY_ERROR}), 500

    @app.route("/", defaults={"path": ""})
    @app.route("/<path:path>")
    def frontend(path: str):
        if path and (build_path / path).is_file():
            return send_from_directory(build_path, path)
        if (build_path / "index.html").is_file():
            return send_from_directory(build_path, "index.html")
        return MISSING_BUILD_MESSAGE, 404

    return app


def run_server(config: AppConfig | None = None, port: int | None = None) -> None:
    config = config or load_config()
    app = create_app(config)
    port = port or config.port
    logger.info("Server is running and listening on port %s", port)
    # Bind to all interfaces so the server is reachable from inside a container.
    app.run(host="0.0.0.0", port=port, debug=False)
