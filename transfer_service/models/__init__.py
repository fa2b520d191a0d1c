from transfer_service.models.transaction import Transaction
