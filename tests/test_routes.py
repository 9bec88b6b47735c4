"""HTTP route tests using the Flask test client."""

from __future__ import annotations

from datetime import date

from dairyledger import errors


def _base(dairy) -> str:
    return f"/dairies/{dairy.id}"


def test_customer_crud_over_http(client, dairy):
    base = _base(dairy)

    created = client.post(f"{base}/customers", json={"name": "Asha", "phone": "9800"})
    assert created.status_code == 201
    customer_id = created.get_json()["id"]

    assert client.get(f"{base}/customers/{customer_id}").get_json()["name"] == "Asha"
    patched = client.patch(f"{base}/customers/{customer_id}", json={"address": "Ward 4"})
    assert patched.get_json()["address"] == "Ward 4"
    assert [c["name"] for c in client.get(f"{base}/customers/search?q=as").get_json()] == ["Asha"]

    assert client.delete(f"{base}/customers/{customer_id}").status_code == 204
    missing = client.get(f"{base}/customers/{customer_id}")
    assert missing.status_code == 404
    assert missing.get_json()["code"] == errors.CUSTOMER_NOT_FOUND
    assert client.get(f"{base}/customers").get_json() == []


def test_validation_errors_are_422_with_field_list(client, dairy):
    response = client.put(f"{_base(dairy)}/rates", json={"fat": 20, "snf": 8.5})

    assert response.status_code == 422
    body = response.get_json()
    assert {e["field"] for e in body["errors"]} == {"fat", "rate_per_liter"}


def test_non_object_body_rejected(client, dairy):
    response = client.post(f"{_base(dairy)}/customers", json=["Asha"])

    assert response.status_code == 422
    assert response.get_json()["errors"][0]["field"] == "body"


def test_rate_resolution_endpoint(client, dairy):
    base = _base(dairy)

    empty = client.get(f"{base}/rates/resolve?fat=3.8&snf=8.5")
    assert empty.status_code == 422
    assert empty.get_json()["code"] == errors.MISSING_RATE

    client.put(f"{base}/rates", json={"fat": 3.5, "snf": 8.5, "rate_per_liter": 45})
    client.put(f"{base}/rates", json={"fat": 4.0, "snf": 8.5, "rate_per_liter": 48})

    resolved = client.get(f"{base}/rates/resolve?fat=3.8&snf=8.5").get_json()
    assert resolved["rate_per_liter"] == 48.0
    assert resolved["is_exact"] is False
    assert [r["fat"] for r in client.get(f"{base}/rates").get_json()] == [3.5, 4.0]

    assert client.get(f"{base}/rates/resolve?fat=abc&snf=8.5").status_code == 422


def test_entry_flow_and_daily_summary(client, dairy, customer_factory, rate_factory):
    base = _base(dairy)
    rate_factory(4.0, 8.5, 48.0)
    asha = customer_factory("Asha")
    ravi = customer_factory("Ravi")

    first = client.post(
        f"{base}/entries",
        json={"customer_id": asha.id, "date": "2024-01-15", "fat": 4.0, "snf": 8.5, "liters": 10.5},
    )
    assert first.status_code == 201
    assert first.get_json()["amount"] == 504.0
    assert first.get_json()["date"] == "2024-01-15"
    client.post(
        f"{base}/entries",
        json={
            "customer_id": ravi.id,
            "date": "2024-01-15",
            "fat": 4.0,
            "snf": 8.5,
            "liters": 9.5,
            "shift": "evening",
        },
    )

    listed = client.get(f"{base}/entries?date=2024-01-15").get_json()
    assert len(listed) == 2

    daily = client.get(f"{base}/summary/daily?date=2024-01-15").get_json()
    assert daily == {"date": "2024-01-15", "total_liters": 20.0, "total_amount": 960.0, "entry_count": 2}

    entry_id = first.get_json()["id"]
    patched = client.patch(f"{base}/entries/{entry_id}", json={"liters": 10})
    assert patched.get_json()["amount"] == 480.0
    assert client.delete(f"{base}/entries/{entry_id}").status_code == 204
    assert client.get(f"{base}/entries/{entry_id}").status_code == 404


def test_entry_without_rates_is_business_error(client, dairy, customer_factory):
    customer = customer_factory()

    response = client.post(
        f"{_base(dairy)}/entries",
        json={"customer_id": customer.id, "date": "2024-01-15", "fat": 4.0, "snf": 8.5, "liters": 10},
    )

    assert response.status_code == 422
    assert response.get_json()["code"] == errors.MISSING_RATE
    assert "errors" not in response.get_json()


def test_summary_endpoints(client, dairy, entry_factory, customer_factory):
    base = _base(dairy)
    customer = customer_factory()
    entry_factory(customer, date(2024, 2, 3), liters=10.0)

    weekly = client.get(f"{base}/summary/weekly?start=2024-02-01").get_json()
    monthly = client.get(f"{base}/summary/monthly?year=2024&month=2").get_json()
    ranged = client.get(f"{base}/summary/range?start=2024-02-01&end=2024-02-29").get_json()

    assert len(weekly["daily_breakdown"]) == 7
    assert weekly["total_liters"] == 10.0
    assert len(monthly["weekly_breakdown"]) == 5
    assert ranged["total_amount"] == 480.0
    assert client.get(f"{base}/summary/weekly").status_code == 422
    assert client.get(f"{base}/summary/range?start=2024-02-10&end=2024-02-01").status_code == 422
    assert client.get(f"{base}/summary/monthly?year=2024&month=13").status_code == 422


def test_accounts_and_portal(client, dairy, customer_factory, entry_factory):
    signup = client.post(
        "/accounts/signup",
        json={"email": "owner@example.com", "password": "s3cret-pass", "dairy_name": "Hill Dairy"},
    )
    assert signup.status_code == 201
    assert "password_hash" not in signup.get_json()
    owner_id = signup.get_json()["id"]

    assert client.post("/accounts/login", json={"email": "owner@example.com", "password": "nope-nope"}).status_code == 403
    assert client.post("/accounts/login", json={"email": "owner@example.com", "password": "s3cret-pass"}).status_code == 200

    customer = customer_factory("Asha")
    entry_factory(customer, date(2024, 1, 10), liters=5.0)
    login = client.post(
        f"{_base(dairy)}/customers/{customer.id}/login",
        json={"email": "asha@example.com", "password": "milk-money"},
    )
    assert login.status_code == 201
    user_id = login.get_json()["id"]

    entries = client.get(f"/portal/{user_id}/entries").get_json()
    assert [e["date"] for e in entries] == ["2024-01-10"]
    monthly = client.get(f"/portal/{user_id}/summary/monthly?year=2024&month=1").get_json()
    assert monthly["total_liters"] == 5.0
    assert len(client.get(f"/portal/{user_id}/history?months=3").get_json()) == 3

    assert client.get(f"/portal/{owner_id}/entries").status_code == 403
    assert client.get("/portal/9999/entries").status_code == 404


def test_out_of_calendar_year_is_422(client, dairy):
    response = client.get(f"{_base(dairy)}/summary/monthly?year=0&month=1")

    assert response.status_code == 422
    assert response.get_json()["errors"][0]["field"] == "year"
    assert client.get(f"{_base(dairy)}/summary/monthly?year=10000&month=1").status_code == 422


def test_malformed_customer_filter_is_422(client, dairy, customer_factory, entry_factory):
    entry_factory(customer_factory("Asha"), date(2024, 1, 15))
    base = _base(dairy)

    for url in (
        f"{base}/summary/daily?date=2024-01-15&customer_id=abc",
        f"{base}/summary/weekly?start=2024-01-15&customer_id=abc",
        f"{base}/entries?customer_id=abc",
        f"{base}/customers?limit=ten",
    ):
        response = client.get(url)
        assert response.status_code == 422, url
        error = response.get_json()["errors"][0]
        assert error["code"] == errors.INVALID_TYPE, url

    assert client.get(f"{base}/summary/daily?date=2024-01-15").get_json()["entry_count"] == 1


def test_rate_resolution_rejects_out_of_range_quality(client, dairy, rate_factory):
    rate_factory(4.0, 8.5, 48.0)

    response = client.get(f"{_base(dairy)}/rates/resolve?fat=20&snf=8.5")
    assert response.status_code == 422
    assert {(e["field"], e["code"]) for e in response.get_json()["errors"]} == {("fat", errors.INVALID_FAT)}

    negative = client.get(f"{_base(dairy)}/rates/resolve?fat=4&snf=-1")
    assert {e["code"] for e in negative.get_json()["errors"]} == {errors.INVALID_SNF}


def test_non_text_credentials_are_422(client, dairy):
    login = client.post("/accounts/login", json={"email": 5, "password": "x"})
    assert login.status_code == 422
    assert login.get_json()["errors"][0]["code"] == errors.INVALID_EMAIL

    signup = client.post(
        "/accounts/signup", json={"email": 5, "password": "s3cret-pass", "dairy_name": "Hill Dairy"}
    )
    assert signup.status_code == 422

    customer = client.post(f"{_base(dairy)}/customers", json={"name": "Asha", "phone": 123})
    assert customer.status_code == 422
    assert customer.get_json()["errors"][0] == {
        "field": "phone",
        "code": errors.INVALID_TYPE,
        "message": "Phone must be text",
    }


def test_portal_history_lookback_is_capped(client, dairy, customer_factory):
    customer = customer_factory("Asha")
    login = client.post(
        f"{_base(dairy)}/customers/{customer.id}/login",
        json={"email": "asha@example.com", "password": "milk-money"},
    )
    user_id = login.get_json()["id"]

    response = client.get(f"/portal/{user_id}/history?months=100000")

    assert response.status_code == 422
    assert response.get_json()["errors"][0]["field"] == "months"
