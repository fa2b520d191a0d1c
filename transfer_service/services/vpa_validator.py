"""
VPA Validator - Transfer Service
Checks Virtual Payment Addresses (username@bankhandle) for format,
known bank handles and reserved words.
"""

import re
from dataclasses import dataclass, field

VPA_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9._-]{0,49}@[a-zA-Z][a-zA-Z0-9]{1,20}$")

VALID_BANK_HANDLES = frozenset({
    "sbi", "hdfc", "icici", "axis", "pnb", "boi", "bob", "canara", "union",
    "kotak", "indus", "yes", "idbi", "federal", "rbl", "dcb", "kvb", "csb",
    "paytm", "ybl", "okhdfcbank", "okicici", "okaxis", "oksbi", "apl",
    "upi", "gpay", "phonepe", "amazonpay", "freecharge", "mobikwik",
    "idfcbank", "axisbank", "hdfcbank", "icicibank", "sbibank",
})

BLOCKED_PATTERNS = (
    "test", "admin", "root", "system", "null", "undefined", "blocked", "fraud",
)


@dataclass
class ValidationResult:
    vpa: str = None
    valid: bool = False
    username: str = None
    bank_handle: str = None
    errors: list = field(default_factory=list)
    warnings: list = field(default_factory=list)

    def add_error(self, message):
        self.errors.append(message)

    def add_warning(self, message):
        self.warnings.append(message)

    def has_errors(self):
        return bool(self.errors)

    def has_warnings(self):
        return bool(self.warnings)

    def to_dict(self):
        return {
            "vpa":         self.vpa,
            "valid":       self.valid,
            "username":    self.username,
            "bank_handle": self.bank_handle,
            "errors":      list(self.errors),
            "warnings":    list(self.warnings),
        }


def is_valid_format(vpa):
    if vpa is None or not vpa.strip():
        return False
    return VPA_PATTERN.fullmatch(vpa.strip()) is not None


def extract_bank_handle(vpa):
    if vpa is None or "@" not in vpa:
        return None
    parts = vpa.split("@")
    return parts[1].lower() if len(parts) == 2 else None


def extract_username(vpa):
    if vpa is None or "@" not in vpa:
        return None
    return vpa.split("@")[0]


def has_valid_bank_handle(vpa):
    if not is_valid_format(vpa):
        return False
    handle = extract_bank_handle(vpa.strip())
    return handle is not None and handle in VALID_BANK_HANDLES


def contains_blocked_pattern(vpa):
    if vpa is None:
        return False
    lower_vpa = vpa.lower()
    return any(pattern in lower_vpa for pattern in BLOCKED_PATTERNS)


def validate(vpa):
    """
    Full validation with a detailed result.
    Checks run in order and the first failure wins:
        empty -> format -> blocked pattern -> bank handle
    An unknown bank handle still reports the parsed username and handle.
    """
    result = ValidationResult(vpa=vpa)

    if vpa is None or not vpa.strip():
        result.add_error("VPA cannot be null or empty")
        return result

    trimmed = vpa.strip()

    if not is_valid_format(trimmed):
        result.add_error("Invalid VPA format. Expected: username@bankhandle")
        return result

    if contains_blocked_pattern(trimmed):
        result.add_error("VPA contains blocked/reserved pattern")
        return result

    handle = extract_bank_handle(trimmed)
    result.username = extract_username(trimmed)
    result.bank_handle = handle

    if handle not in VALID_BANK_HANDLES:
        result.add_error(f"Unknown bank handle: {handle}")
        result.add_warning("Handle may be valid but not in approved list")
    else:
        result.valid = True

    return result


def are_different_vpas(payer_vpa, payee_vpa):
    if payer_vpa is None or payee_vpa is None:
        return False
    return payer_vpa.lower() != payee_vpa.lower()


def is_same_bank(vpa1, vpa2):
    handle1 = extract_bank_handle(vpa1)
    handle2 = extract_bank_handle(vpa2)
    if handle1 is None or handle2 is None:
        return False
    return handle1 == handle2


def normalize(vpa):
    if vpa is None:
        return None
    return vpa.strip().lower()


def get_valid_bank_handles():
    return VALID_BANK_HANDLES
