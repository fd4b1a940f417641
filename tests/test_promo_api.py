from datetime import timedelta

from storefront.extensions import db
from storefront.models.base import utc_now
from storefront.models.promo_code import PromoCode

PROMO_URL = "/api/v1/promo-codes"


def test_validate_valid_code(client, make_promo):
    make_promo(code="EID10", value=10)

    response = client.post(
        f"{PROMO_URL}/validate", json={"code": "eid10", "subtotal": 1000}
    )

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["valid"] is True
    assert data["type"] == "PERCENTAGE"
    assert data["value"] == 10
    assert data["discountAmount"] == 100


def test_validate_does_not_count_usage(client, make_promo):
    promo = make_promo(code="ONCE", max_uses=1)

    client.post(f"{PROMO_URL}/validate", json={"code": "ONCE", "subtotal": 500})
    client.post(f"{PROMO_URL}/validate", json={"code": "ONCE", "subtotal": 500})

    db.session.refresh(promo)
    assert promo.used_count == 0


def test_validate_expired_code(client, make_promo):
    make_promo(code="OLD", expires_at=utc_now() - timedelta(hours=1))

    response = client.post(f"{PROMO_URL}/validate", json={"code": "OLD", "subtotal": 500})

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["valid"] is False
    assert data["reasonCode"] == "promo_expired"
    assert data["reason"] == "Promo code has expired."


def test_validate_requires_code_and_numeric_subtotal(client):
    response = client.post(f"{PROMO_URL}/validate", json={"subtotal": "lots"})

    assert response.status_code == 400
    fields = [error["field"] for error in response.get_json()["data"]["errors"]]
    assert fields == ["code", "subtotal"]


def test_admin_routes_require_a_token(client):
    response = client.get(PROMO_URL)
    assert response.status_code == 401
    assert response.get_json()["error"] == "unauthorized"

    response = client.get(PROMO_URL, headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_admin_routes_reject_customers(client, customer_headers):
    response = client.post(
        PROMO_URL,
        json={"code": "EID10", "type": "PERCENTAGE", "value": 10},
        headers=customer_headers,
    )
    assert response.status_code == 403
    assert response.get_json()["error"] == "forbidden"


def test_create_promo_code(client, admin_headers):
    response = client.post(
        PROMO_URL,
        json={
            "code": " eid25 ",
            "type": "PERCENTAGE",
            "value": 25,
            "minOrderAmount": 500,
            "maxUses": 100,
            "expiresAt": "2030-04-10T18:00:00+06:00",
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.get_json()["data"]
    assert data["code"] == "EID25"
    assert data["minOrderAmount"] == 500
    assert data["maxUses"] == 100
    assert data["usedCount"] == 0
    assert data["expiresAt"] == "2030-04-10T12:00:00Z"
    assert data["isActive"] is True


def test_create_duplicate_code(client, admin_headers, make_promo):
    make_promo(code="EID10")

    response = client.post(
        PROMO_URL,
        json={"code": "eid10", "type": "FIXED", "value": 50},
        headers=admin_headers,
    )

    assert response.status_code == 409


def test_create_rejects_bad_values(client, admin_headers):
    response = client.post(
        PROMO_URL,
        json={"code": "HALF", "type": "PERCENTAGE", "value": 150},
        headers=admin_headers,
    )
    assert response.status_code == 400

    response = client.post(
        PROMO_URL,
        json={"code": "ZERO", "type": "FIXED", "value": 0},
        headers=admin_headers,
    )
    assert response.status_code == 400

    response = client.post(
        PROMO_URL, json={"type": "FIXED", "value": 10}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.get_json()["data"]["errors"][0]["field"] == "code"


def test_list_promo_codes(client, admin_headers, make_promo):
    make_promo(code="FIRST")
    make_promo(code="SECOND")

    response = client.get(PROMO_URL, headers=admin_headers)

    assert response.status_code == 200
    codes = {promo["code"] for promo in response.get_json()["data"]}
    assert codes == {"FIRST", "SECOND"}


def test_update_promo_code(client, admin_headers, make_promo):
    promo = make_promo(code="EID10")

    response = client.patch(
        f"{PROMO_URL}/{promo.id}",
        json={"isActive": False, "value": 15},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["isActive"] is False
    assert data["value"] == 15


def test_update_rules(client, admin_headers, make_promo):
    make_promo(code="TAKEN")
    promo = make_promo(code="EID10")

    response = client.patch(
        f"{PROMO_URL}/{promo.id}", json={"code": "taken"}, headers=admin_headers
    )
    assert response.status_code == 409

    response = client.patch(
        f"{PROMO_URL}/{promo.id}", json={"value": 120}, headers=admin_headers
    )
    assert response.status_code == 400

    response = client.patch(
        f"{PROMO_URL}/9999", json={"value": 5}, headers=admin_headers
    )
    assert response.status_code == 404


def test_delete_promo_code(client, admin_headers, make_promo):
    promo = make_promo(code="EID10")
    promo_id = promo.id

    response = client.delete(f"{PROMO_URL}/{promo_id}", headers=admin_headers)
    assert response.status_code == 200
    db.session.expire_all()
    assert db.session.get(PromoCode, promo_id) is None

    response = client.delete(f"{PROMO_URL}/{promo_id}", headers=admin_headers)
    assert response.status_code == 404


def test_validate_rejects_non_finite_subtotal(client, make_promo):
    make_promo(code="EID10")

    for raw in ("NaN", "Infinity", "-Infinity"):
        response = client.post(
            f"{PROMO_URL}/validate",
            data=f'{{"code": "EID10", "subtotal": {raw}}}',
            content_type="application/json",
        )

        assert response.status_code == 400
        fields = [error["field"] for error in response.get_json()["data"]["errors"]]
        assert fields == ["subtotal"]


def test_create_rejects_non_finite_numbers(client, admin_headers):
    response = client.post(
        PROMO_URL,
        data='{"code": "INF", "type": "FIXED", "value": Infinity}',
        content_type="application/json",
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.get_json()["data"]["errors"][0]["field"] == "value"

    response = client.post(
        PROMO_URL,
        data='{"code": "NAN", "type": "FIXED", "value": 10, "minOrderAmount": NaN}',
        content_type="application/json",
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.get_json()["data"]["errors"][0]["field"] == "minOrderAmount"

    assert db.session.query(PromoCode).count() == 0


def test_update_rejects_non_finite_value(client, admin_headers, make_promo):
    promo = make_promo(code="EID10", value=10)

    response = client.patch(
        f"{PROMO_URL}/{promo.id}",
        data='{"value": NaN}',
        content_type="application/json",
        headers=admin_headers,
    )

    assert response.status_code == 400
    db.session.refresh(promo)
    assert promo.value == 10
