# shop_api/repositories/customer.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from shop_api.models.customer import Customer
from shop_api.utils.log import Log


class CustomerRepository:
    """Доступ к записям клиентов. Без валидации: её делают сервисы и роуты."""

    def __init__(self, db: AsyncSession, log: Log):
        self.db = db
        self.log = log

    async def create(self, **fields) -> Customer:
        customer = Customer(**fields)
        self.db.add(customer)
        await self.db.commit()
        await self.db.refresh(customer)

        await self.log.log_info("customer", "Клиент создан", {"id": customer.id})
        return customer

    async def find_all(self) -> list[Customer]:
        result = await self.db.execute(select(Customer))
        return list(result.scalars().all())

    async def find_by_id(self, id: str) -> Customer | None:
        result = await self.db.execute(
            select(Customer).where(Customer.id == id).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def update(self, id: str, fields: dict) -> Customer | None:
        """Обновляет только переданные поля; None если клиента нет."""
        customer = await self.find_by_id(id)
        if customer is None:
            await self.log.log_warning("customer", "Клиент не найден для обновления", {"id": id})
            return None

        for key, value in fields.items():
            setattr(customer, key, value)

        customer = await self.save(customer)
        await self.log.log_info("customer", "Клиент обновлён", {"id": id, "fields": sorted(fields)})
        return customer

    async def save(self, customer: Customer) -> Customer:
        self.db.add(customer)
        await self.db.commit()
        await self.db.refresh(customer)
        return customer

    async def delete(self, id: str) -> bool:
        """Жёсткое удаление. Отсутствие клиента ошибкой не считается."""
        customer = await self.find_by_id(id)
        if customer is None:
            await self.log.log_warning("customer", "Клиент для удаления не найден", {"id": id})
            return False

        await self.db.delete(customer)
        await self.db.commit()
        await self.log.log_info("customer", "Клиент удалён", {"id": id})
        return True
