"""
Request body parsing for the transfer API.
Field-level checks run here so the service layer only sees typed input.
"""

from decimal import Decimal, InvalidOperation

from transfer_service.exceptions import RequestValidationError
from transfer_service.services.transfer_service import MAX_AMOUNT, MIN_AMOUNT, TransferRequest
from transfer_service.services.vpa_validator import VPA_PATTERN

MAX_REMARKS_LENGTH = 500
MAX_TRANSACTION_TYPE_LENGTH = 20
CENTS = Decimal("0.01")


def _require_json_object(data):
    if not isinstance(data, dict):
        raise RequestValidationError(
            [{"field": "body", "message": "Request body must be a JSON object"}],
        )


def _check_vpa(data, field, label, errors):
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        errors.append({"field": field, "message": f"{label} VPA is required"})
    elif not VPA_PATTERN.fullmatch(value):
        errors.append({"field": field, "message": f"Invalid {label} VPA format"})


def _to_decimal(value):
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def _check_amount(data, errors):
    raw = data.get("amount")
    if raw is None:
        errors.append({"field": "amount", "message": "Amount is required"})
        return None

    amount = _to_decimal(raw)
    if amount is None:
        errors.append({"field": "amount", "message": "Invalid amount format"})
        return None

    if amount < MIN_AMOUNT:
        errors.append({"field": "amount", "message": "Minimum transfer amount is ₹1"})
    elif amount > MAX_AMOUNT:
        errors.append({"field": "amount", "message": "Maximum transfer amount is ₹1,00,000"})
    elif amount != amount.quantize(CENTS):
        # range check already bounds the integer part to six digits
        errors.append({"field": "amount", "message": "Invalid amount format"})
    return amount


def parse_transfer_request(data):
    """
    Build a TransferRequest from a JSON body.
    Body: { payer_vpa, payee_vpa, amount, transaction_type?, remarks?, upi_pin? }
    Raises RequestValidationError listing every failing field.
    """
    _require_json_object(data)
    errors = []

    _check_vpa(data, "payer_vpa", "Payer", errors)
    _check_vpa(data, "payee_vpa", "Payee", errors)
    amount = _check_amount(data, errors)

    transaction_type = data.get("transaction_type") or "P2P"
    if not isinstance(transaction_type, str):
        errors.append({"field": "transaction_type", "message": "Transaction type must be a string"})
    elif len(transaction_type) > MAX_TRANSACTION_TYPE_LENGTH:
        errors.append({"field": "transaction_type", "message": "Transaction type cannot exceed 20 characters"})

    remarks = data.get("remarks")
    if remarks is not None and not isinstance(remarks, str):
        errors.append({"field": "remarks", "message": "Remarks must be a string"})
    elif remarks is not None and len(remarks) > MAX_REMARKS_LENGTH:
        errors.append({"field": "remarks", "message": "Remarks cannot exceed 500 characters"})

    if errors:
        raise RequestValidationError(errors)

    return TransferRequest(
        payer_vpa=data["payer_vpa"],
        payee_vpa=data["payee_vpa"],
        amount=amount,
        transaction_type=transaction_type,
        remarks=remarks,
        upi_pin=data.get("upi_pin"),
    )


def parse_validation_request(data):
    """Body: { vpa }"""
    _require_json_object(data)
    vpa = data.get("vpa")
    if not isinstance(vpa, str) or not vpa.strip():
        raise RequestValidationError([{"field": "vpa", "message": "VPA is required"}])
    return vpa
