from storefront.services.auth import AuthService


def test_repr_hides_filtered_columns(app):
    user = AuthService.create_user("admin@example.com", "secret-password", name="Admin")

    text = repr(user)

    assert text.startswith("User(")
    assert "admin@example.com" in text
    assert "password" not in text
    assert user.password not in text


def test_repr_lists_every_column(make_product):
    product = make_product("P1", base_price=500, stock_qty=3)

    text = repr(product)

    assert text.startswith("Product(")
    assert "'stock_qty': 3" in text
    assert "'base_price': Decimal('500" in text
