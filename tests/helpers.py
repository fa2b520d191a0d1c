"""Shared fixtures for the in-process test suites."""

import unittest
from decimal import Decimal

from transfer_service.app import create_app
from transfer_service.extensions import db
from transfer_service.services.transfer_service import TransferRequest

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "LOG_LEVEL": "WARNING",
}


class AppTestCase(unittest.TestCase):
    """Fresh app and in-memory database per test."""

    def setUp(self):
        self.app = create_app(TEST_CONFIG)
        self.client = self.app.test_client()
        self.ctx = self.app.app_context()
        self.ctx.push()

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.ctx.pop()


def valid_request(transaction_type="P2P", **overrides):
    fields = {
        "payer_vpa": "payer@sbi",
        "payee_vpa": "payee@hdfc",
        "amount": Decimal("1000.00"),
        "transaction_type": transaction_type,
        "remarks": "Test transfer",
    }
    fields.update(overrides)
    return TransferRequest(**fields)


def valid_payload(**overrides):
    body = {
        "payer_vpa": "payer@sbi",
        "payee_vpa": "payee@hdfc",
        "amount": 1000.00,
        "transaction_type": "P2P",
    }
    body.update(overrides)
    return body
