# shop_api/services/exceptions.py

"""
Доменные ошибки кошелька и покупок.
Роуты превращают их в ответы с простым текстом.
"""


class WalletError(Exception):
    """Базовая ошибка операций с клиентом и кошельком."""
    status_code = 400
    detail = "Wallet operation failed"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class CustomerNotFound(WalletError):
    status_code = 404
    detail = "Customer not found"


class InvalidRange(WalletError):
    """rate_discount вне [0, 100]."""
    status_code = 400
    detail = "Invalid rate_discount value. Must be between 0 and 100"


class InsufficientFunds(WalletError):
    """В кошельке меньше итоговой цены."""
    status_code = 400
    detail = "Insufficient wallet balance"
