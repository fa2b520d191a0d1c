from datetime import datetime, timezone

from flask import Blueprint, jsonify
from sqlalchemy import text

from transfer_service.extensions import db

health_bp = Blueprint("health", __name__)


@health_bp.route("/api/v1/health", methods=["GET"])
def api_health():
    """
    Service liveness
    ---
    tags:
      - Health
    responses:
      200:
        description: Service is running
    """
    return jsonify({"status": "UP", "message": "Transfer Service is running"}), 200


@health_bp.route("/health", methods=["GET"])
def health_check():
    """
    Health check including the database connection
    ---
    tags:
      - Health
    responses:
      200:
        description: Service is healthy
      503:
        description: Service is unhealthy (DB connection failed)
    """
    try:
        db.session.execute(text("SELECT 1"))
        return jsonify({
            "status": "healthy",
            "service": "transfer-service",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }), 200
    except Exception as e:
        return jsonify({"status": "unhealthy", "service": "transfer-service", "error": str(e)}), 503
