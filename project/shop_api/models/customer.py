# shop_api/models/customer.py

from sqlalchemy import Column, Float, String
from shop_api.utils.database import Base, new_object_id

class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(24), primary_key=True, default=new_object_id)

    name          = Column(String, nullable=True)
    email         = Column(String, nullable=True)               # без уникальности
    password      = Column(String, nullable=True)               # только хэш
    phone         = Column(String, nullable=True)
    rate_discount = Column(Float, nullable=True, default=None)  # None - скидки нет
    wallet        = Column(Float, nullable=False, default=0)
