from storefront.exceptions import InsufficientStock, NotFound


class TestNotFound:
    def test_carries_messages_keyed_by_kind(self):
        exc = NotFound("order", "ord-1")
        assert exc.messages == {"order": ["order `ord-1` was not found"]}
        assert exc.kind == "order"
        assert exc.identifier == "ord-1"

    def test_identifier_is_stringified(self):
        assert NotFound("product", 42).messages == {"product": ["product `42` was not found"]}


class TestInsufficientStock:
    def test_messages_name_the_shortfall(self):
        exc = InsufficientStock("prod-ten", requested=4, available=3)
        assert "only 3 remain, 4 requested" in exc.messages["quantity"][0]
