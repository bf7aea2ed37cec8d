# shop_api/models/order.py

from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Float, String
from shop_api.utils.database import Base, new_object_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(24), primary_key=True, default=new_object_id)

    # слабая ссылка: без ForeignKey и каскада
    customer_id   = Column(String(24), index=True, nullable=True)
    product_name  = Column(String, nullable=True)
    product_price = Column(Float, nullable=True)   # итоговая цена после скидки
    purchase_date = Column(DateTime(timezone=True), default=utcnow)
