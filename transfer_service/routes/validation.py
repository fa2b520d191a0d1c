import logging

from flask import Blueprint, jsonify, request

from transfer_service.schemas import parse_validation_request
from transfer_service.services import vpa_validator

logger = logging.getLogger(__name__)

validation_bp = Blueprint("validation", __name__)


@validation_bp.route("/validate/vpa", methods=["POST"])
def validate_vpa():
    """
    Validate a Virtual Payment Address
    ---
    tags:
      - Validation
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - vpa
          properties:
            vpa:
              type: string
              example: user@sbi
    responses:
      200:
        description: Validation completed (see "valid" and "errors")
      400:
        description: Missing vpa
    """
    vpa = parse_validation_request(request.get_json())
    logger.info("Validating VPA: %s", vpa)
    return jsonify(vpa_validator.validate(vpa).to_dict()), 200


@validation_bp.route("/validate/vpa/<vpa>", methods=["GET"])
def quick_validate_vpa(vpa):
    """
    Quick check of a VPA passed in the path
    ---
    tags:
      - Validation
    parameters:
      - in: path
        name: vpa
        required: true
        type: string
        example: user@sbi
    responses:
      200:
        description: Validation completed
    """
    logger.info("Quick validating VPA: %s", vpa)
    return jsonify(vpa_validator.validate(vpa).to_dict()), 200
