# shop_api/repositories/order.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from shop_api.models.customer import Customer
from shop_api.models.order import Order
from shop_api.utils.log import Log


class OrderRepository:
    def __init__(self, db: AsyncSession, log: Log):
        self.db = db
        self.log = log

    async def create(self, customer_id: str, product_name: str | None, final_price: float) -> Order:
        order = Order(
            customer_id=customer_id,
            product_name=product_name,
            product_price=final_price,
        )
        self.db.add(order)
        await self.db.commit()
        await self.db.refresh(order)

        await self.log.log_info("order", "Заказ создан", {"id": order.id, "customer_id": customer_id})
        return order

    async def find_all(self) -> list[Order]:
        result = await self.db.execute(select(Order).order_by(Order.purchase_date))
        return list(result.scalars().all())

    async def find_all_with_customer(self) -> list[tuple[Order, Customer | None]]:
        """
        Все заказы вместе с клиентом.
        Внешнее соединение при чтении: удалённый клиент даёт (order, None).
        """
        result = await self.db.execute(
            select(Order, Customer)
            .outerjoin(Customer, Customer.id == Order.customer_id)
            .order_by(Order.purchase_date)
        )
        return [tuple(row) for row in result.all()]

    async def find_by_customer(self, customer_id: str) -> list[Order]:
        result = await self.db.execute(
            select(Order).where(Order.customer_id == customer_id).order_by(Order.purchase_date)
        )
        return list(result.scalars().all())
