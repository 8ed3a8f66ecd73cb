"""
tests/test_api.py
=================
HTTP surface: envelope, status codes, paging and error mapping.
The database is seeded through the API only, so no test session holds a lock.
"""
import pytest
from sqlalchemy.exc import SQLAlchemyError

from market.branch.service import branches
from market.config import settings
from market.responses import handle_response

MISSING_ID = "00000000-0000-0000-0000-000000000000"


def _data(response):
    return response.json()["data"]


@pytest.fixture
def branch_id(api):
    return _data(api.post("/branch", json={"name": "Chilonzor", "address": "Tashkent"}))["id"]


@pytest.fixture
def stocked_product(api, branch_id):
    """A product with 10 units received at the branch."""
    product = _data(api.post("/product", json={"name": "Tea", "price": 100, "branch_id": branch_id}))
    coming = _data(api.post("/coming", json={"branch_id": branch_id}))
    api.post("/picking_list", json={
        "product_id": product["id"],
        "quantity": 10,
        "price": 60,
        "coming_increment_id": coming["increment_id"],
    })
    return product


class TestEnvelope:

    def test_create_returns_201(self, api):
        response = api.post("/branch", json={"name": "Yunusobod"})
        body = response.json()

        assert response.status_code == 201
        assert body["status"] == 201
        assert body["description"] == "success"
        assert body["data"]["name"] == "Yunusobod"

    def test_get_update_delete(self, api, branch_id):
        response = api.get(f"/branch/{branch_id}")
        assert response.status_code == 200
        assert _data(response)["address"] == "Tashkent"

        response = api.put(f"/branch/{branch_id}", json={"phone": "+998901234567"})
        assert response.status_code == 202
        assert _data(response)["phone"] == "+998901234567"
        assert _data(response)["name"] == "Chilonzor"

        response = api.delete(f"/branch/{branch_id}")
        assert response.status_code == 200
        assert _data(response) == "deleted"

        assert api.get(f"/branch/{branch_id}").status_code == 400

    def test_health(self, api):
        assert api.get("/health").json() == {"status": "ok"}


class TestErrors:

    def test_malformed_uuid(self, api):
        response = api.get("/branch/123")
        assert response.status_code == 400
        assert response.json()["description"] == "error"
        assert response.json()["data"] == "id is not uuid"

    def test_unknown_id(self, api):
        response = api.get(f"/sale/{MISSING_ID}")
        assert response.status_code == 400

    def test_invalid_body(self, api):
        assert api.post("/branch", json={"address": "no name"}).status_code == 400

    def test_non_integer_limit(self, api):
        assert api.get("/branch", params={"limit": "ten"}).status_code == 400

    def test_business_rule_status(self, api, branch_id, stocked_product):
        sale = _data(api.post("/sale", json={"branch_id": branch_id}))

        response = api.post("/saleproduct", json={
            "sale_id": sale["id"], "product_id": stocked_product["id"], "quantity": 11,
        })
        assert response.status_code == settings.BUSINESS_RULE_STATUS
        assert _data(response) == "not enough quantity"

    def test_store_failure_is_redacted(self, api, monkeypatch):
        def broken(*args, **kwargs):
            raise SQLAlchemyError("disk I/O error at /var/lib/market.db")

        monkeypatch.setattr(branches, "list", broken)

        response = api.get("/branch")
        assert response.status_code == 500
        assert response.json() == {
            "status": 500,
            "description": "error",
            "data": "Internal Server Error",
        }

    def test_unexpected_error_keeps_envelope(self, api, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("worker state lost")

        monkeypatch.setattr(branches, "list", broken)

        response = api.get("/branch")
        assert response.status_code == 500
        assert response.json() == {
            "status": 500,
            "description": "error",
            "data": "Internal Server Error",
        }

    def test_explicit_null_on_required_column(self, api, branch_id):
        product = _data(api.post("/product", json={"name": "Tea", "price": 100, "branch_id": branch_id}))

        response = api.put(f"/product/{product['id']}", json={"price": None})
        assert response.status_code == 400

        response = api.put(f"/branch/{branch_id}", json={"name": None})
        assert response.status_code == 400

        assert _data(api.get(f"/product/{product['id']}"))["price"] == 100

    def test_non_finite_price_rejected(self, api, branch_id):
        body = '{"name": "Tea", "price": Infinity, "branch_id": "%s"}' % branch_id
        response = api.post("/product", content=body, headers={"Content-Type": "application/json"})
        assert response.status_code == 400

    def test_handle_response_redacts_500(self):
        response = handle_response(500, "secret detail")
        assert b"secret detail" not in response.body


class TestList:

    def test_paging_and_count(self, api):
        for name in ("Alpha", "Beta", "Gamma"):
            api.post("/branch", json={"name": name})

        body = _data(api.get("/branch", params={"limit": 2, "offset": 0}))
        assert body["count"] == 3
        assert len(body["branches"]) == 2

        body = _data(api.get("/branch", params={"limit": 2, "offset": 2}))
        assert len(body["branches"]) == 1

    def test_search_is_case_insensitive(self, api):
        api.post("/client", json={"first_name": "Dilnoza", "phone": "111"})
        api.post("/client", json={"first_name": "Bekzod", "phone": "222"})

        body = _data(api.get("/client", params={"search": "dILno"}))
        assert body["count"] == 1
        assert body["clients"][0]["first_name"] == "Dilnoza"


class TestSaleFlow:

    def test_sell_and_pay(self, api, branch_id, stocked_product):
        sale = _data(api.post("/sale", json={"branch_id": branch_id}))
        assert sale["increment_id"] == "S-0000001"

        response = api.post("/saleproduct", json={
            "sale_id": sale["id"], "product_id": stocked_product["id"], "quantity": 4,
        })
        assert response.status_code == 201
        assert _data(response)["total_price"] == 400

        response = api.put("/make_pay", params={"sale_id": sale["increment_id"], "money": 100})
        assert response.status_code == settings.BUSINESS_RULE_STATUS
        assert _data(response) == "not enough money"

        response = api.put("/make_pay", params={"sale_id": sale["increment_id"], "money": 300})
        assert response.status_code == 202
        assert _data(response) == "successful payment"

        paid = _data(api.get(f"/sale/{sale['id']}"))
        assert paid["total_price"] == 400
        assert paid["paid"] == 300
        assert paid["debt"] == 100

        remainders = _data(api.get("/remainder"))["remainders"]
        assert remainders[0]["quantity"] == 6

    @pytest.mark.parametrize("money", ["inf", "nan", "-inf"])
    def test_make_pay_non_finite_money(self, api, branch_id, stocked_product, money):
        sale = _data(api.post("/sale", json={"branch_id": branch_id}))
        api.post("/saleproduct", json={
            "sale_id": sale["id"], "product_id": stocked_product["id"], "quantity": 1,
        })

        response = api.put("/make_pay", params={"sale_id": sale["increment_id"], "money": money})
        assert response.status_code == 400

        unpaid = api.get(f"/sale/{sale['id']}")
        assert unpaid.status_code == 200
        assert _data(unpaid)["paid"] == 0
        assert api.get("/sale").status_code == 200

    def test_make_pay_unknown_sale(self, api):
        response = api.put("/make_pay", params={"sale_id": "S-0000404", "money": 10})
        assert response.status_code == 400


class TestReports:

    def test_branch_doc(self, api, branch_id, stocked_product):
        for quantity in (1, 2):
            sale = _data(api.post("/sale", json={"branch_id": branch_id}))
            api.post("/saleproduct", json={
                "sale_id": sale["id"], "product_id": stocked_product["id"], "quantity": quantity,
            })

        doc = _data(api.get("/branch_doc", params={"branch_id": branch_id}))
        assert doc == {
            "branch_id": branch_id,
            "branch_name": "Chilonzor",
            "total_sale_price": 300.0,
            "total_sale_quantity": 3,
        }

    def test_registration_returns_list(self, api):
        api.post("/client", json={"first_name": "Aziz"})
        response = api.get("/registration", params={"from": "2000-01-01", "to": "2999-01-01"})

        assert response.status_code == 200
        assert [c["first_name"] for c in _data(response)] == ["Aziz"]

    def test_registration_malformed_date(self, api):
        response = api.get("/registration", params={"from": "01.02.2024", "to": "2024-03-01"})
        assert response.status_code == 400
