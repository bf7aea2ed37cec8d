# shop_api/schemas/order.py

from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from shop_api.schemas.customer import CustomerSummary

class Order(BaseModel):
    id: str
    customer_id: Optional[str] = None
    product_name: Optional[str] = None
    product_price: Optional[float] = None   # итоговая цена
    purchase_date: datetime

    model_config = {
        "from_attributes": True
    }

class OrderWithCustomer(Order):
    customer: Optional[CustomerSummary] = None  # None если клиент удалён
