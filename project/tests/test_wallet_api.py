"""Интеграционные тесты пополнения, скидки, покупки и заказов."""

import pytest

UNKNOWN_ID = "000000000000000000000000"


@pytest.fixture()
def funded_customer(client, make_customer):
    def _funded(wallet, rate_discount=None, **fields):
        customer = make_customer(**fields)
        client.post(f"/customers/{customer['id']}/topup", json={"wallet_topup": wallet})
        if rate_discount is not None:
            client.post(f"/customers/{customer['id']}/discount", json={"rate_discount": rate_discount})
        return client.get(f"/customers/{customer['id']}").json()

    return _funded


class TestTopUp:
    def test_top_up_adds_amount(self, client, make_customer):
        customer = make_customer()

        response = client.post(f"/customers/{customer['id']}/topup", json={"wallet_topup": 150})

        assert response.status_code == 200
        assert response.json()["wallet"] == 150

    def test_top_ups_accumulate(self, client, make_customer):
        customer = make_customer()

        client.post(f"/customers/{customer['id']}/topup", json={"wallet_topup": 10})
        response = client.post(f"/customers/{customer['id']}/topup", json={"wallet_topup": 2.5})

        assert response.json()["wallet"] == 12.5

    def test_negative_top_up_debits_without_floor(self, client, make_customer):
        customer = make_customer()
        client.post(f"/customers/{customer['id']}/topup", json={"wallet_topup": 20})

        response = client.post(f"/customers/{customer['id']}/topup", json={"wallet_topup": -50})

        assert response.status_code == 200
        assert response.json()["wallet"] == -30

    def test_top_up_unknown_customer(self, client):
        response = client.post(f"/customers/{UNKNOWN_ID}/topup", json={"wallet_topup": 10})

        assert response.status_code == 404
        assert response.text == "Customer not found"

    def test_top_up_rejects_non_numeric(self, client, make_customer):
        customer = make_customer()

        response = client.post(f"/customers/{customer['id']}/topup", json={"wallet_topup": "lots"})

        assert response.status_code == 422


class TestDiscount:
    def test_set_discount(self, client, make_customer):
        customer = make_customer()

        response = client.post(f"/customers/{customer['id']}/discount", json={"rate_discount": 25})

        assert response.status_code == 200
        assert response.json()["rate_discount"] == 25

    @pytest.mark.parametrize("rate", [0, 100])
    def test_bounds_are_accepted(self, client, make_customer, rate):
        customer = make_customer()

        response = client.post(f"/customers/{customer['id']}/discount", json={"rate_discount": rate})

        assert response.status_code == 200
        assert response.json()["rate_discount"] == rate

    @pytest.mark.parametrize("rate", [150, -1, 100.5])
    def test_out_of_range_is_rejected(self, client, funded_customer, rate):
        customer = funded_customer(40, rate_discount=10)

        response = client.post(f"/customers/{customer['id']}/discount", json={"rate_discount": rate})

        assert response.status_code == 400
        assert response.text == "Invalid rate_discount value. Must be between 0 and 100"
        unchanged = client.get(f"/customers/{customer['id']}").json()
        assert unchanged["rate_discount"] == 10
        assert unchanged["wallet"] == 40

    def test_nan_is_rejected_and_keeps_discount(self, client, funded_customer):
        customer = funded_customer(40, rate_discount=10)

        response = client.post(
            f"/customers/{customer['id']}/discount",
            content='{"rate_discount": NaN}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.text == "Invalid rate_discount value. Must be between 0 and 100"
        assert client.get(f"/customers/{customer['id']}").json()["rate_discount"] == 10

    def test_unknown_customer_is_checked_first(self, client):
        response = client.post(f"/customers/{UNKNOWN_ID}/discount", json={"rate_discount": 150})

        assert response.status_code == 404
        assert response.text == "Customer not found"


class TestPurchase:
    def test_purchase_with_discount(self, client, funded_customer):
        customer = funded_customer(200, rate_discount=20)

        response = client.post(
            f"/customers/{customer['id']}/purchase",
            json={"product_name": "Kettle", "product_price": 100},
        )

        assert response.status_code == 200
        order = response.json()
        assert order["customer_id"] == customer["id"]
        assert order["product_name"] == "Kettle"
        assert order["product_price"] == 80
        assert order["purchase_date"]
        assert client.get(f"/customers/{customer['id']}").json()["wallet"] == 120

    def test_purchase_without_discount(self, client, funded_customer):
        customer = funded_customer(100)

        response = client.post(
            f"/customers/{customer['id']}/purchase",
            json={"product_name": "Mug", "product_price": 30},
        )

        assert response.json()["product_price"] == 30
        assert client.get(f"/customers/{customer['id']}").json()["wallet"] == 70

    def test_zero_discount_behaves_like_no_discount(self, client, funded_customer):
        unset = funded_customer(100)
        zero = funded_customer(100, rate_discount=0)
        assert zero["rate_discount"] == 0

        for customer in (unset, zero):
            response = client.post(
                f"/customers/{customer['id']}/purchase",
                json={"product_name": "Mug", "product_price": 40},
            )
            assert response.json()["product_price"] == 40
            assert client.get(f"/customers/{customer['id']}").json()["wallet"] == 60

    def test_exact_balance_is_enough(self, client, funded_customer):
        customer = funded_customer(50)

        response = client.post(
            f"/customers/{customer['id']}/purchase",
            json={"product_name": "Lamp", "product_price": 50},
        )

        assert response.status_code == 200
        assert client.get(f"/customers/{customer['id']}").json()["wallet"] == 0

    def test_insufficient_funds(self, client, funded_customer):
        customer = funded_customer(50, rate_discount=10)

        response = client.post(
            f"/customers/{customer['id']}/purchase",
            json={"product_name": "Sofa", "product_price": 100},
        )

        assert response.status_code == 400
        assert response.text == "Insufficient wallet balance"
        assert client.get(f"/customers/{customer['id']}").json()["wallet"] == 50
        assert client.get(f"/customers/{customer['id']}/orders").json() == []

    def test_purchase_unknown_customer(self, client):
        response = client.post(
            f"/customers/{UNKNOWN_ID}/purchase",
            json={"product_name": "Mug", "product_price": 1},
        )

        assert response.status_code == 404
        assert response.text == "Customer not found"


class TestOrders:
    def test_customer_orders(self, client, funded_customer):
        buyer = funded_customer(100)
        other = funded_customer(100)
        client.post(f"/customers/{buyer['id']}/purchase", json={"product_name": "A", "product_price": 10})
        client.post(f"/customers/{buyer['id']}/purchase", json={"product_name": "B", "product_price": 20})
        client.post(f"/customers/{other['id']}/purchase", json={"product_name": "C", "product_price": 30})

        response = client.get(f"/customers/{buyer['id']}/orders")

        assert response.status_code == 200
        assert [o["product_name"] for o in response.json()] == ["A", "B"]

    def test_orders_of_unknown_customer_is_empty(self, client):
        response = client.get(f"/customers/{UNKNOWN_ID}/orders")

        assert response.status_code == 200
        assert response.json() == []

    def test_all_orders_include_customer_details(self, client, funded_customer):
        buyer = funded_customer(100, name="Ada", email="ada@example.com")
        client.post(f"/customers/{buyer['id']}/purchase", json={"product_name": "A", "product_price": 10})

        response = client.get("/orders")

        assert response.status_code == 200
        [order] = response.json()
        assert order["customer_id"] == buyer["id"]
        assert order["customer"] == {"id": buyer["id"], "name": "Ada", "email": "ada@example.com"}

    def test_orders_survive_customer_deletion(self, client, funded_customer):
        buyer = funded_customer(100)
        client.post(f"/customers/{buyer['id']}/purchase", json={"product_name": "A", "product_price": 10})

        client.delete(f"/customers/{buyer['id']}")

        [order] = client.get("/orders").json()
        assert order["customer_id"] == buyer["id"]
        assert order["customer"] is None
        assert len(client.get(f"/customers/{buyer['id']}/orders").json()) == 1

    def test_repository_lists_plain_orders(self, client, funded_customer):
        from shop_api.repositories.order import OrderRepository

        buyer = funded_customer(100)
        client.post(f"/customers/{buyer['id']}/purchase", json={"product_name": "A", "product_price": 10})

        async def fetch():
            async with client.app.state.database.session() as db:
                return await OrderRepository(db, client.app.state.log).find_all()

        [order] = client.portal.call(fetch)
        assert order.customer_id == buyer["id"]
        assert order.product_price == 10
