import unittest

from tests.helpers import AppTestCase, valid_payload


class TestUserJourney(AppTestCase):
    """Validate both parties, pay, then look the payment up again."""

    def test_validate_pay_and_track(self):
        # 1. Validate sender and receiver
        for vpa, handle in [("sender@sbi", "sbi"), ("receiver@hdfc", "hdfc")]:
            resp = self.client.get(f"/api/v1/validate/vpa/{vpa}")
            self.assertEqual(resp.status_code, 200)
            self.assertTrue(resp.get_json()["valid"])
            self.assertEqual(resp.get_json()["bank_handle"], handle)

        # 2. Merchant payment across banks
        resp = self.client.post("/api/v1/transfer", json=valid_payload(
            payer_vpa="sender@sbi",
            payee_vpa="receiver@hdfc",
            amount=5000,
            transaction_type="P2M",
            remarks="Groceries",
        ))
        self.assertEqual(resp.status_code, 201)
        created = resp.get_json()
        ref = created["transaction_ref"]
        # 15.00 + 2.00 inter-bank = 17.00, GST 3.06
        self.assertEqual(created["charges"], 20.06)
        self.assertEqual(created["total_amount"], 5020.06)

        # 3. Status lookup
        resp = self.client.get(f"/api/v1/transfer/{ref}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json()["status"], "SUCCESS")
        self.assertEqual(resp.get_json()["bank_rrn"], created["bank_rrn"])

        # 4. History shows the payment
        resp = self.client.get("/api/v1/transfer/history/sender@sbi")
        history = resp.get_json()
        self.assertEqual(len(history), 1)
        self.assertEqual(history[0]["transaction_ref"], ref)
        self.assertEqual(history[0]["remarks"], "Groceries")

    def test_failed_payment_is_tracked(self):
        resp = self.client.post("/api/v1/transfer", json=valid_payload(payee_vpa="failsafe@ybl"))
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.get_json()["status"], "FAILED")

        ref = resp.get_json()["transaction_ref"]
        resp = self.client.get(f"/api/v1/transfer/{ref}")
        self.assertEqual(resp.get_json()["message"], "Transfer failed")
        self.assertIsNone(resp.get_json()["bank_rrn"])

    def test_repeat_payments_build_history(self):
        for amount in [100, 200, 300]:
            resp = self.client.post(
                "/api/v1/transfer",
                json=valid_payload(payer_vpa="repeat.payer@okaxis", amount=amount),
            )
            self.assertEqual(resp.status_code, 201)

        history = self.client.get("/api/v1/transfer/history/repeat.payer@okaxis").get_json()
        self.assertEqual(len(history), 3)
        self.assertEqual(sorted(h["amount"] for h in history), [100.0, 200.0, 300.0])

    def test_rejected_payment_leaves_no_history(self):
        resp = self.client.post(
            "/api/v1/transfer",
            json=valid_payload(payer_vpa="lonely@sbi", payee_vpa="lonely@sbi"),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get("/api/v1/transfer/history/lonely@sbi").get_json(), [])


if __name__ == "__main__":
    unittest.main()
