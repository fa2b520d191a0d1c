"""
Transaction Model - Transfer Service
Status: INITIATED | PENDING | PROCESSING | SUCCESS | FAILED | REVERSED | TIMEOUT | CANCELLED
"""

import uuid
from datetime import datetime, timezone
from transfer_service.extensions import db

INITIATED = "INITIATED"
PENDING = "PENDING"
PROCESSING = "PROCESSING"
SUCCESS = "SUCCESS"
FAILED = "FAILED"
REVERSED = "REVERSED"
TIMEOUT = "TIMEOUT"
CANCELLED = "CANCELLED"

TRANSACTION_STATUSES = (
    INITIATED,
    PENDING,
    PROCESSING,
    SUCCESS,
    FAILED,
    REVERSED,
    TIMEOUT,
    CANCELLED,
)

TERMINAL_STATUSES = {SUCCESS, FAILED, REVERSED, TIMEOUT, CANCELLED}

STATUS_MESSAGES = {
    INITIATED: "Transfer has been initiated",
    PENDING: "Transfer is pending",
    PROCESSING: "Transfer is being processed",
    SUCCESS: "Transfer completed successfully",
    FAILED: "Transfer failed",
    REVERSED: "Transfer has been reversed",
    TIMEOUT: "Transfer timed out",
    CANCELLED: "Transfer was cancelled",
}


def _utcnow():
    return datetime.now(timezone.utc)


class Transaction(db.Model):
    __tablename__ = "transactions"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    transaction_ref = db.Column(db.String(30), unique=True, nullable=False, index=True)
    payer_vpa = db.Column(db.String(100), nullable=False, index=True)
    payee_vpa = db.Column(db.String(100), nullable=False)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    charges = db.Column(db.Numeric(10, 2), nullable=True)
    transaction_type = db.Column(db.String(20), nullable=True)
    status = db.Column(
        db.Enum(*TRANSACTION_STATUSES, name="transaction_status"),
        nullable=False,
        default=INITIATED,
        index=True,
    )
    remarks = db.Column(db.String(500), nullable=True)
    failure_reason = db.Column(db.String(500), nullable=True)
    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        index=True,
    )
    completed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    bank_rrn = db.Column(db.String(50), nullable=True)
    version = db.Column(db.Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __init__(self, **kwargs):
        # Column defaults only apply on flush; callers read these before that.
        kwargs.setdefault("status", INITIATED)
        kwargs.setdefault("created_at", _utcnow())
        super().__init__(**kwargs)

    @property
    def processing_time_ms(self):
        if self.created_at is None or self.completed_at is None:
            return -1
        created_at = self.created_at
        completed_at = self.completed_at
        # SQLite hands back naive datetimes
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        if completed_at.tzinfo is None:
            completed_at = completed_at.replace(tzinfo=timezone.utc)
        return int((completed_at - created_at).total_seconds() * 1000)

    def to_dict(self):
        return {
            "id":               self.id,
            "transaction_ref":  self.transaction_ref,
            "payer_vpa":        self.payer_vpa,
            "payee_vpa":        self.payee_vpa,
            "amount":           float(self.amount),
            "charges":          float(self.charges) if self.charges is not None else None,
            "transaction_type": self.transaction_type,
            "status":           self.status,
            "remarks":          self.remarks,
            "failure_reason":   self.failure_reason,
            "created_at":       self.created_at.isoformat(),
            "completed_at":     self.completed_at.isoformat() if self.completed_at else None,
            "bank_rrn":         self.bank_rrn,
        }

    def __repr__(self):
        return (
            f"<Transaction {self.transaction_ref} {self.payer_vpa} -> {self.payee_vpa} "
            f"{self.amount} {self.status}>"
        )
