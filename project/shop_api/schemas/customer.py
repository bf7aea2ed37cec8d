# shop_api/schemas/customer.py

from pydantic import BaseModel
from typing import Optional

# ────────────── Базовая схема ──────────────
class CustomerBase(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

# ────────────── Схема для CREATE ──────────────
class CustomerCreate(CustomerBase):
    password: str

# ────────────── Схема для UPDATE ──────────────
class CustomerUpdate(CustomerBase):
    password: Optional[str] = None  # без пароля хэш не меняется

# ────────────── Тела запросов кошелька ──────────────
class TopUpRequest(BaseModel):
    wallet_topup: float

class DiscountRequest(BaseModel):
    rate_discount: float  # диапазон проверяет сервис, ответ 400

class PurchaseRequest(BaseModel):
    product_name: Optional[str] = None
    product_price: float

# ────────────── Схема для RESPONSE ──────────────
class Customer(CustomerBase):
    """Хэш пароля в ответ не попадает."""
    id: str
    rate_discount: Optional[float] = None
    wallet: float = 0

    model_config = {
        "from_attributes": True
    }

class CustomerSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None

    model_config = {
        "from_attributes": True
    }
