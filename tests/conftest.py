import os

os.environ["FLASK_CONFIG"] = "testing"
os.environ["LOG_FILE"] = ""
for _key in ("SMS_API_KEY", "SMS_BASE_URL", "SMS_SENDER_ID"):
    os.environ.pop(_key, None)

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402

import const  # noqa: E402
from storefront import create_app  # noqa: E402
from storefront.config import TestingConfig  # noqa: E402
from storefront.extensions import db  # noqa: E402
from storefront.models.product import Product  # noqa: E402
from storefront.models.promo_code import PromoCode  # noqa: E402
from storefront.services.auth import AuthService  # noqa: E402


@pytest.fixture
def app(tmp_path):
    class Config(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'storefront.db'}"
        SQLALCHEMY_ENGINE_OPTIONS = {
            "connect_args": {"check_same_thread": False, "timeout": 30}
        }

    app = create_app(Config)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_product(app):
    def _make(product_id="P1", base_price=500, stock_qty=10, **kwargs):
        sale_price = kwargs.pop("sale_price", None)
        product = Product(
            id=product_id,
            name_en=kwargs.pop("name_en", f"Product {product_id}"),
            name_bn=kwargs.pop("name_bn", "পণ্য"),
            base_price=Decimal(str(base_price)),
            sale_price=Decimal(str(sale_price)) if sale_price is not None else None,
            stock_qty=stock_qty,
            **kwargs,
        )
        return product.save()

    return _make


@pytest.fixture
def make_promo(app):
    def _make(code="EID10", type="PERCENTAGE", value=10, **kwargs):
        promo = PromoCode(
            code=code,
            type=type,
            value=Decimal(str(value)),
            min_order_amount=Decimal(str(kwargs.pop("min_order_amount", 0))),
            **kwargs,
        )
        return promo.save()

    return _make


@pytest.fixture
def admin_headers(app):
    user = AuthService.create_user(
        "admin@example.com", "secret-password", name="Admin", role=const.ROLE_ADMIN
    )
    token = AuthService.generate_token(user)["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers(app):
    user = AuthService.create_user("buyer@example.com", "secret-password")
    token = AuthService.generate_token(user)["accessToken"]
    return {"Authorization": f"Bearer {token}"}


class SmsOutbox:
    def __init__(self):
        self.messages = []

    def delay(self, phone, message):
        self.messages.append((phone, message))


@pytest.fixture
def sms_outbox(monkeypatch):
    outbox = SmsOutbox()
    monkeypatch.setattr("storefront.services.notification.send_sms", outbox)
    return outbox


def order_payload(**overrides):
    payload = {
        "customerName": "Rahim Uddin",
        "customerPhone": "01712345678",
        "customerAddress": "House 12, Road 5, Dhanmondi, Dhaka",
        "paymentMethod": "COD",
        "items": [{"productId": "P1", "quantity": 2}],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def payload():
    return order_payload
