"""
Transfer processing - Transfer Service
Handles the fund transfer lifecycle: validation, charges, persistence,
simulated bank processing and status lookups.

    process_transfer(request)
    get_transaction_status(transaction_ref)
    get_transaction_history(vpa)
    update_transaction_status(transaction_ref, new_status, failure_reason)
"""

import itertools
import logging
import random
import threading
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from transfer_service.exceptions import PaymentError
from transfer_service.extensions import db
from transfer_service.models.transaction import (
    CANCELLED,
    FAILED,
    INITIATED,
    PENDING,
    PROCESSING,
    REVERSED,
    STATUS_MESSAGES,
    SUCCESS,
    TERMINAL_STATUSES,
    TIMEOUT,
    Transaction,
)
from transfer_service.services import charge_calculator, vpa_validator

logger = logging.getLogger(__name__)

MIN_AMOUNT = Decimal("1.00")
MAX_AMOUNT = Decimal("100000.00")
HISTORY_LIMIT = 10

_ref_counter = itertools.count(1)
_ref_lock = threading.Lock()
_rrn_random = random.Random()

VALID_TRANSITIONS = {
    INITIATED: {PENDING, PROCESSING, CANCELLED},
    PENDING: {PROCESSING, CANCELLED, TIMEOUT},
    PROCESSING: {SUCCESS, FAILED, TIMEOUT},
    SUCCESS: {REVERSED},
    FAILED: set(),
    REVERSED: set(),
    TIMEOUT: set(),
    CANCELLED: set(),
}


@dataclass
class TransferRequest:
    payer_vpa: str = None
    payee_vpa: str = None
    amount: Decimal = None
    transaction_type: str = "P2P"
    remarks: str = None
    upi_pin: str = None

    def __repr__(self):
        # upi_pin never ends up in logs
        return (
            f"TransferRequest(payer_vpa={self.payer_vpa!r}, payee_vpa={self.payee_vpa!r}, "
            f"amount={self.amount}, transaction_type={self.transaction_type!r})"
        )


@dataclass
class TransferResult:
    transaction_ref: str
    status: str
    message: str
    amount: Decimal
    charges: Decimal
    payer_vpa: str
    payee_vpa: str
    total_amount: Decimal = None
    bank_rrn: str = None
    timestamp: datetime = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "transaction_ref": self.transaction_ref,
            "status":          self.status,
            "message":         self.message,
            "timestamp":       self.timestamp.isoformat(),
            "amount":          float(self.amount),
            "charges":         float(self.charges) if self.charges is not None else None,
            "total_amount":    float(self.total_amount) if self.total_amount is not None else None,
            "payer_vpa":       self.payer_vpa,
            "payee_vpa":       self.payee_vpa,
            "bank_rrn":        self.bank_rrn,
        }


# --- Validation ---------------------------------------------------------

def is_valid_vpa(vpa):
    return (
        vpa_validator.is_valid_format(vpa)
        and vpa_validator.has_valid_bank_handle(vpa)
        and not vpa_validator.contains_blocked_pattern(vpa)
    )


def is_valid_amount(amount):
    if amount is None:
        return False
    return MIN_AMOUNT <= amount <= MAX_AMOUNT


def _validate_transfer_request(request):
    if not is_valid_vpa(request.payer_vpa):
        raise PaymentError(f"Invalid payer VPA: {request.payer_vpa}", "INVALID_PAYER_VPA")

    if not is_valid_vpa(request.payee_vpa):
        raise PaymentError(f"Invalid payee VPA: {request.payee_vpa}", "INVALID_PAYEE_VPA")

    if not vpa_validator.are_different_vpas(
        vpa_validator.normalize(request.payer_vpa), vpa_validator.normalize(request.payee_vpa),
    ):
        raise PaymentError("Payer and payee cannot be the same", "SAME_VPA")

    if not is_valid_amount(request.amount):
        raise PaymentError(
            f"Amount must be between ₹{MIN_AMOUNT:.2f} and ₹{MAX_AMOUNT:.2f}",
            "INVALID_AMOUNT",
        )


# --- Reference numbers --------------------------------------------------

def generate_transaction_ref():
    """TXN + UTC yyyyMMddHHmmss + two-digit rolling counter (19 chars)."""
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    with _ref_lock:
        suffix = next(_ref_counter) % 100
    return f"TXN{timestamp}{suffix:02d}"


def generate_bank_rrn():
    return f"{_rrn_random.randrange(10 ** 12):012d}"


# --- Transfer processing ------------------------------------------------

def process_transfer(request):
    """
    Validates the request, computes charges, stores the transaction as
    PROCESSING and then settles it through the simulated bank call.
    Raises PaymentError on any business rule violation.
    """
    if request is None:
        raise PaymentError("Transfer request cannot be null", "INVALID_REQUEST")

    logger.info(
        "Processing transfer request: %s -> %s, amount: %s",
        request.payer_vpa, request.payee_vpa, request.amount,
    )

    _validate_transfer_request(request)

    transaction_ref = generate_transaction_ref()

    payer_vpa = vpa_validator.normalize(request.payer_vpa)
    payee_vpa = vpa_validator.normalize(request.payee_vpa)

    is_inter_bank = not vpa_validator.is_same_bank(payer_vpa, payee_vpa)
    charge_result = charge_calculator.calculate_charges(
        request.amount, request.transaction_type, is_inter_bank,
    )

    transaction = Transaction(
        transaction_ref=transaction_ref,
        payer_vpa=payer_vpa,
        payee_vpa=payee_vpa,
        amount=request.amount,
        charges=charge_result.total_charges,
        transaction_type=request.transaction_type,
        remarks=request.remarks,
        status=PROCESSING,
    )

    try:
        db.session.add(transaction)
        db.session.commit()

        final_status, failure_reason = _simulate_transfer_processing(transaction)
        _apply_status(transaction, final_status, failure_reason)
        if final_status == SUCCESS:
            transaction.bank_rrn = generate_bank_rrn()
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    logger.info("Transfer completed: ref=%s, status=%s", transaction_ref, final_status)

    return TransferResult(
        transaction_ref=transaction_ref,
        status=final_status,
        message=STATUS_MESSAGES[final_status],
        amount=request.amount,
        charges=charge_result.total_charges,
        total_amount=charge_result.net_amount,
        payer_vpa=request.payer_vpa,
        payee_vpa=request.payee_vpa,
        bank_rrn=transaction.bank_rrn,
    )


def _simulate_transfer_processing(transaction):
    # No bank is called; any VPA containing "fail" is declined
    if "fail" in transaction.payer_vpa or "fail" in transaction.payee_vpa:
        return FAILED, "Declined by remitter bank (simulated)"
    return SUCCESS, None


# --- Status lifecycle ---------------------------------------------------

def _apply_status(transaction, new_status, failure_reason=None):
    allowed = VALID_TRANSITIONS.get(transaction.status, set())
    if new_status not in allowed:
        raise PaymentError(
            f"Cannot transition from {transaction.status} to {new_status}",
            "INVALID_STATUS_TRANSITION",
        )

    transaction.status = new_status
    if failure_reason:
        transaction.failure_reason = failure_reason
    if new_status in TERMINAL_STATUSES:
        transaction.completed_at = datetime.now(timezone.utc)


def update_transaction_status(transaction_ref, new_status, failure_reason=None):
    """
    Moves a stored transaction along VALID_TRANSITIONS, e.g.
        PROCESSING -> SUCCESS | FAILED | TIMEOUT
        SUCCESS    -> REVERSED
    """
    transaction = find_by_transaction_ref(transaction_ref)
    if transaction is None:
        raise PaymentError(f"Transaction not found: {transaction_ref}", "TXN_NOT_FOUND")

    _apply_status(transaction, new_status, failure_reason)
    db.session.commit()
    return transaction


# --- Queries ------------------------------------------------------------

def find_by_transaction_ref(transaction_ref):
    return Transaction.query.filter_by(transaction_ref=transaction_ref).first()


def get_transaction_status(transaction_ref):
    logger.debug("Getting status for transaction: %s", transaction_ref)

    transaction = find_by_transaction_ref(transaction_ref)
    if transaction is None:
        raise PaymentError(f"Transaction not found: {transaction_ref}", "TXN_NOT_FOUND")

    return TransferResult(
        transaction_ref=transaction.transaction_ref,
        status=transaction.status,
        message=STATUS_MESSAGES.get(transaction.status, "Unknown status"),
        amount=transaction.amount,
        charges=transaction.charges,
        payer_vpa=transaction.payer_vpa,
        payee_vpa=transaction.payee_vpa,
        bank_rrn=transaction.bank_rrn,
    )


def get_transaction_history(vpa):
    return (
        Transaction.query
        .filter_by(payer_vpa=vpa_validator.normalize(vpa))
        .order_by(Transaction.created_at.desc())
        .limit(HISTORY_LIMIT)
        .all()
    )


def _day_bounds(day):
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


def get_daily_transaction_total(payer_vpa, day):
    """Sum of SUCCESS amounts sent by payer_vpa on the given UTC date."""
    start, end = _day_bounds(day)
    total = (
        db.session.query(func.coalesce(func.sum(Transaction.amount), 0))
        .filter(
            Transaction.payer_vpa == payer_vpa.lower(),
            Transaction.status == SUCCESS,
            Transaction.created_at >= start,
            Transaction.created_at < end,
        )
        .scalar()
    )
    return Decimal(str(total)).quantize(charge_calculator.CENTS)


def get_daily_transaction_count(payer_vpa, day):
    start, end = _day_bounds(day)
    return (
        Transaction.query
        .filter(
            Transaction.payer_vpa == payer_vpa.lower(),
            Transaction.status == SUCCESS,
            Transaction.created_at >= start,
            Transaction.created_at < end,
        )
        .count()
    )


def find_stale_transactions(threshold):
    return (
        Transaction.query
        .filter(
            Transaction.status.in_((PENDING, PROCESSING)),
            Transaction.created_at < threshold,
        )
        .order_by(Transaction.created_at)
        .all()
    )


def count_by_status(status):
    return Transaction.query.filter_by(status=status).count()
