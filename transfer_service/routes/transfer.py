import logging

from flask import Blueprint, jsonify, request

from transfer_service.schemas import parse_transfer_request
from transfer_service.services.transfer_service import (
    get_transaction_history,
    get_transaction_status,
    process_transfer,
)

logger = logging.getLogger(__name__)

transfer_bp = Blueprint("transfer", __name__)


@transfer_bp.route("/transfer", methods=["POST"])
def create_transfer():
    """
    Process a UPI fund transfer from payer to payee
    ---
    tags:
      - Transfer
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - payer_vpa
            - payee_vpa
            - amount
          properties:
            payer_vpa:
              type: string
              example: user@sbi
            payee_vpa:
              type: string
              example: merchant@hdfc
            amount:
              type: number
              example: 1000.00
            transaction_type:
              type: string
              enum: [P2P, P2M, BILL]
              default: P2P
            remarks:
              type: string
              maxLength: 500
            upi_pin:
              type: string
    responses:
      201:
        description: Transfer processed
      400:
        description: Invalid request
      415:
        description: Content-Type is not application/json
    """
    transfer_request = parse_transfer_request(request.get_json())

    logger.info(
        "Received transfer request: %s -> %s",
        transfer_request.payer_vpa, transfer_request.payee_vpa,
    )

    result = process_transfer(transfer_request)
    return jsonify(result.to_dict()), 201


@transfer_bp.route("/transfer/<transaction_ref>", methods=["GET"])
def transfer_status(transaction_ref):
    """
    Get status of a transaction by reference number
    ---
    tags:
      - Transfer
    parameters:
      - in: path
        name: transaction_ref
        required: true
        type: string
        example: TXN2024120712000001
    responses:
      200:
        description: Transaction found
      404:
        description: Transaction not found
    """
    result = get_transaction_status(transaction_ref)
    return jsonify(result.to_dict()), 200


@transfer_bp.route("/transfer/history/<vpa>", methods=["GET"])
def transfer_history(vpa):
    """
    Get the ten most recent transfers sent by a VPA
    ---
    tags:
      - Transfer
    parameters:
      - in: path
        name: vpa
        required: true
        type: string
        example: user@sbi
    responses:
      200:
        description: Transaction history, newest first
    """
    logger.info("Getting transaction history for: %s", vpa)
    history = get_transaction_history(vpa)
    return jsonify([t.to_dict() for t in history]), 200
