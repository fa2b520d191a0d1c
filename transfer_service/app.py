"""
Transfer Service - Flask application
UPI fund transfers, VPA validation and transaction status tracking.
"""

import logging
import os

from dotenv import load_dotenv
from flasgger import Swagger
from flask import Flask

from transfer_service.errors import register_error_handlers
from transfer_service.extensions import db
from transfer_service.models import Transaction  # noqa: F401  (registers the table)

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level):
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


def create_app(test_config=None):
    app = Flask(__name__)

    # Configuration
    app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get(
        "DATABASE_URL", "sqlite:///upi_transfers.db"
    )
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO").upper()
    if test_config:
        app.config.update(test_config)

    configure_logging(app.config["LOG_LEVEL"])

    # Initialize Extensions
    db.init_app(app)

    Swagger(app, template={
        "info": {
            "title": "UPI Transfer Service API",
            "version": "1.0.0",
            "description": "Fund transfer, VPA validation and status tracking",
        },
    })

    # Register Blueprints
    from transfer_service.routes.health import health_bp
    app.register_blueprint(health_bp)

    from transfer_service.routes.transfer import transfer_bp
    app.register_blueprint(transfer_bp, url_prefix="/api/v1")

    from transfer_service.routes.validation import validation_bp
    app.register_blueprint(validation_bp, url_prefix="/api/v1")

    register_error_handlers(app)

    with app.app_context():
        db.create_all()

    app.logger.debug("URL map: %s", app.url_map)
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 8080)))
