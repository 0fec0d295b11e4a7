"""
SEO Sensei - API Server
Flask application factory and development entry point.
"""

import argparse
import logging
from typing import Any, Dict, Optional

from flask import Flask

from sensei.controllers.audit_controller import AuditController
from sensei.managers.config_manager import ConfigManager
from sensei.server.routers.analyze_router import analyze_router
from sensei.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Application factory. Values in ``config`` are applied to the Flask config
    before the defaults; pass ``AUDIT_CONTROLLER`` to inject a prepared controller.
    """
    flask_app = Flask(__name__)
    if config:
        flask_app.config.update(config)

    # Inject controller into app config for Blueprint access
    if not flask_app.config.get('AUDIT_CONTROLLER'):
        flask_app.config['AUDIT_CONTROLLER'] = AuditController.from_config(ConfigManager())

    flask_app.register_blueprint(analyze_router, url_prefix='/api')

    return flask_app


def main(argv=None):
    """Parses arguments and starts the development server."""
    config = ConfigManager()

    parser = argparse.ArgumentParser(description="SEO Sensei API Server")
    parser.add_argument("--host", type=str, default=config.get_nested("server.host", "127.0.0.1"),
                        help="Host interface to bind to")
    parser.add_argument("--port", type=int, default=config.get_nested("server.port", 5000),
                        help="Port to bind the server to")
    args = parser.parse_args(argv)

    serve(args.host, args.port, config)


def serve(host: str, port: int, config: Optional[ConfigManager] = None):
    config = config or ConfigManager()
    configure_logger(config=config)

    app = create_app()

    logger.info("SEO Sensei API listening on http://%s:%s", host, port)
    for rule in app.url_map.iter_rules():
        if "api" in str(rule):
            logger.debug("Route: %s", rule)

    # use_reloader=False prevents double initialization of the controller
    app.run(host=host, port=port, use_reloader=False)


if __name__ == '__main__':
    main()
