from storefront.core.state import ShopState
from storefront.schemas import CartItem, InventoryItem


class TestNotifications:
    def test_every_write_notifies_once_after_value_is_visible(self, state: ShopState):
        seen = []
        state.subscribe(lambda: seen.append((state.inventory, state.cart)))

        state.set_inventory([InventoryItem(id=1, content="Apple")])
        state.set_cart([CartItem(id=1, content="Apple", amount=2)])
        state.set_cart([])

        assert len(seen) == 3
        assert seen[0][0] == (InventoryItem(id=1, content="Apple"),)
        assert seen[1][1][0].amount == 2
        assert seen[2][1] == ()

    def test_equal_value_still_notifies(self, state: ShopState):
        calls = []
        state.subscribe(lambda: calls.append(1))
        cart = state.cart

        state.set_cart(cart)
        state.set_cart(cart)

        assert len(calls) == 2

    def test_write_without_listener_is_silent(self, state: ShopState):
        state.set_inventory([InventoryItem(id=3, content="Pear")])
        assert state.inventory[0].content == "Pear"


class TestSubscribe:
    def test_subscribe_replaces_previous_listener(self, state: ShopState):
        first, second = [], []
        state.subscribe(lambda: first.append(1))
        previous = state.subscribe(lambda: second.append(1))

        state.set_cart([])

        assert first == []
        assert second == [1]
        assert previous is not None

    def test_unsubscribe_with_none(self, state: ShopState):
        calls = []
        state.subscribe(lambda: calls.append(1))
        state.subscribe(None)

        state.set_inventory([])

        assert calls == []


class TestSnapshots:
    def test_snapshots_are_immutable_tuples(self, state: ShopState):
        source = [CartItem(id=1, content="Apple", amount=1)]
        state.set_cart(source)
        source.append(CartItem(id=2, content="Banana", amount=1))

        assert isinstance(state.cart, tuple)
        assert len(state.cart) == 1

    def test_lookup_by_id(self, state: ShopState):
        state.set_inventory([InventoryItem(id=1, content="Apple"), InventoryItem(id=2, content="Banana")])

        assert state.find_inventory_item(2).content == "Banana"
        assert state.find_inventory_item(9) is None
        assert state.find_cart_item(1) is None
