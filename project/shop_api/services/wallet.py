# shop_api/services/wallet.py

from contextlib import nullcontext

from shop_api.models.customer import Customer
from shop_api.models.order import Order
from shop_api.repositories.customer import CustomerRepository
from shop_api.repositories.order import OrderRepository
from shop_api.services.exceptions import CustomerNotFound, InsufficientFunds, InvalidRange
from shop_api.utils.locks import KeyedLocks
from shop_api.utils.log import Log


def final_price(listed_price: float, rate_discount: float | None) -> float:
    """
    Цена после скидки.
    rate_discount = None и rate_discount = 0 одинаково означают "без скидки".
    """
    fraction = rate_discount / 100 if rate_discount else 0
    return listed_price - listed_price * fraction


class WalletService:
    """
    Пополнение кошелька, скидка и покупка.

    Каждая операция - чтение, изменение и запись клиента.
    Если передан locks, операции по одному клиенту выполняются по очереди,
    клиент перечитывается уже под замком. Без locks два параллельных запроса
    могут прочитать один и тот же баланс и потерять одно из списаний.
    """

    def __init__(
        self,
        customers: CustomerRepository,
        orders: OrderRepository,
        log: Log,
        locks: KeyedLocks | None = None,
    ):
        self.customers = customers
        self.orders = orders
        self.log = log
        self.locks = locks

    def locked(self, customer_id: str):
        if self.locks is None:
            return nullcontext()
        return self.locks.hold(customer_id)

    async def load(self, customer_id: str) -> Customer:
        customer = await self.customers.find_by_id(customer_id)
        if customer is None:
            await self.log.log_error("wallet", "Клиент не найден", {"id": customer_id})
            raise CustomerNotFound()
        return customer

    async def top_up(self, customer_id: str, amount: float) -> Customer:
        """Любая сумма, в том числе отрицательная, прибавляется к кошельку."""
        async with self.locked(customer_id):
            customer = await self.load(customer_id)
            customer.wallet = (customer.wallet or 0) + amount
            customer = await self.customers.save(customer)

        await self.log.log_info("wallet", "Кошелёк пополнен", {"id": customer_id, "amount": amount})
        return customer

    async def set_discount(self, customer_id: str, rate_discount: float) -> Customer:
        async with self.locked(customer_id):
            customer = await self.load(customer_id)

            # NaN не проходит ни одно сравнение
            if not 0 <= rate_discount <= 100:
                await self.log.log_error(
                    "wallet", "Скидка вне диапазона", {"id": customer_id, "rate_discount": rate_discount}
                )
                raise InvalidRange()

            customer.rate_discount = rate_discount
            customer = await self.customers.save(customer)

        await self.log.log_info("wallet", "Скидка установлена", {"id": customer_id, "rate_discount": rate_discount})
        return customer

    async def purchase(self, customer_id: str, product_name: str | None, listed_price: float) -> Order:
        async with self.locked(customer_id):
            customer = await self.load(customer_id)
            price = final_price(listed_price, customer.rate_discount)

            if customer.wallet < price:
                await self.log.log_error(
                    "wallet",
                    "Недостаточно средств",
                    {"id": customer_id, "wallet": customer.wallet, "price": price},
                )
                raise InsufficientFunds()

            customer.wallet -= price
            await self.customers.save(customer)
            order = await self.orders.create(customer.id, product_name, price)

        await self.log.log_info(
            "wallet", "Покупка выполнена", {"id": customer_id, "order_id": order.id, "price": price}
        )
        return order
