"""
Charge Calculator - Transfer Service
Tiered transaction fees: percentage of amount by transaction type,
flat inter-bank surcharge, cap on the base fee, GST on top.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENTS = Decimal("0.01")

P2P_FEE_PERCENTAGE = ZERO
P2M_FEE_PERCENTAGE = Decimal("0.30")
BILL_FEE_PERCENTAGE = Decimal("0.50")
GST_RATE = Decimal("18.00")
INTER_BANK_FEE = Decimal("2.00")
MAX_FEE = Decimal("750.00")

# Any type not listed here falls into the free tier
FEE_PERCENTAGES = {
    "P2M":      P2M_FEE_PERCENTAGE,
    "MERCHANT": P2M_FEE_PERCENTAGE,
    "BILL":     BILL_FEE_PERCENTAGE,
    "BILLPAY":  BILL_FEE_PERCENTAGE,
}

FREE_TRANSACTION_TYPES = {"P2P", "UPI", "UPI_LITE"}


@dataclass
class ChargeResult:
    amount: Decimal = None
    transaction_type: str = None
    base_fee: Decimal = ZERO
    gst: Decimal = ZERO
    total_charges: Decimal = ZERO
    net_amount: Decimal = ZERO

    @property
    def is_free_transaction(self):
        return self.total_charges is not None and self.total_charges == ZERO

    def to_dict(self):
        return {
            "amount":           float(self.amount) if self.amount is not None else None,
            "transaction_type": self.transaction_type,
            "base_fee":         float(self.base_fee),
            "gst":              float(self.gst),
            "total_charges":    float(self.total_charges),
            "net_amount":       float(self.net_amount),
        }


def _percent_of(value, percentage):
    return (value * percentage / HUNDRED).quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_charges(amount, transaction_type, is_inter_bank):
    result = ChargeResult(amount=amount, transaction_type=transaction_type)

    if amount is None or amount <= ZERO:
        result.net_amount = amount if amount is not None else ZERO
        return result

    base_fee = calculate_base_fee(amount, transaction_type)

    # Free tiers stay free across banks
    if is_inter_bank and base_fee > ZERO:
        base_fee += INTER_BANK_FEE

    base_fee = min(base_fee, MAX_FEE)
    gst = calculate_gst(base_fee)
    total_charges = base_fee + gst

    result.base_fee = base_fee
    result.gst = gst
    result.total_charges = total_charges
    result.net_amount = amount + total_charges
    return result


def calculate_base_fee(amount, transaction_type):
    percentage = FEE_PERCENTAGES.get((transaction_type or "P2P").upper(), P2P_FEE_PERCENTAGE)
    return _percent_of(amount, percentage)


def calculate_gst(base_fee):
    if base_fee is None or base_fee <= ZERO:
        return ZERO
    return _percent_of(base_fee, GST_RATE)


def is_transaction_free(transaction_type):
    if transaction_type is None:
        return True
    return transaction_type.upper() in FREE_TRANSACTION_TYPES
