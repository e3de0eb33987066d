# cart/tests/test_store.py

import json
from decimal import Decimal
from unittest import mock

from django.test import SimpleTestCase, override_settings

from cart.exceptions import CorruptCartError
from cart.services import summarize
from cart.state import ProductSnapshot
from cart.storage import MemoryCartStorage, deserialize_lines, serialize_lines
from cart.store import CartStore

CAP = ProductSnapshot(
    id="p-cap",
    slug="classic-snapback",
    name="Classic Snapback",
    price=Decimal("12500"),
    images=("https://img.test/cap.jpg",),
    category="Caps",
    sizes=("One Size",),
)

KEY = "justfits-cart"


@override_settings(CHECKOUT={"CART_STORAGE_KEY": KEY})
class CartStoreTests(SimpleTestCase):
    """
    GUARANTEES:
    - Every mutation is written through to storage
    - A reload reproduces the same lines
    - Unreadable storage yields an empty cart instead of an error
    """

    def test_mutations_are_persisted_and_reloaded(self):
        storage = MemoryCartStorage()
        store = CartStore(storage)
        store.add_item(CAP, 2, "One Size")

        reloaded = CartStore(storage)

        self.assertEqual(reloaded.items, store.items)
        self.assertEqual(reloaded.total_price, Decimal("25000"))

    def test_drawer_state_is_not_persisted(self):
        storage = MemoryCartStorage()
        store = CartStore(storage)
        store.open_cart()

        self.assertIsNone(storage.read(KEY))
        self.assertFalse(CartStore(storage).is_open)

    def test_clear_writes_empty_list(self):
        storage = MemoryCartStorage()
        store = CartStore(storage)
        store.add_item(CAP, 1, None)
        store.clear_cart()

        self.assertEqual(json.loads(storage.read(KEY)), [])

    def test_corrupt_storage_gives_empty_cart(self):
        line = '{"product": {"id": "p", "price": %s}, "quantity": %s, "size": "M"}'
        broken = [
            "{not json",
            json.dumps({"a": 1}),
            json.dumps([{"quantity": 1}]),
            json.dumps([42]),
            "[" + line % ('"NaN"', "1") + "]",
            "[" + line % ('"Infinity"', "1") + "]",
            "[" + line % ('"-Infinity"', "1") + "]",
            "[" + line % ('"1e400"', "1") + "]",
            "[" + line % ('"-5"', "1") + "]",
            "[" + line % ('"100"', "1e400") + "]",
            "[" + line % ('"100"', "10000000") + "]",
            "[" + line % ('"100"', "0") + "]",
        ]

        for raw in broken:
            with self.subTest(raw=raw):
                store = CartStore(MemoryCartStorage({KEY: raw}))

                self.assertEqual(store.items, ())
                self.assertEqual(store.total_items, 0)
                self.assertEqual(summarize(store)["total"], "0.00")

    def test_unexpected_load_failure_gives_empty_cart(self):
        raw = json.dumps([{"product": CAP.to_dict(), "quantity": 1, "size": "M"}])

        with mock.patch("cart.store.deserialize_lines", side_effect=RuntimeError("boom")):
            store = CartStore(MemoryCartStorage({KEY: raw}))

        self.assertEqual(store.items, ())

    def test_update_and_remove_through_store(self):
        storage = MemoryCartStorage()
        store = CartStore(storage)
        store.add_item(CAP, 1, "One Size")
        store.update_quantity("p-cap", "One Size", 3)
        self.assertEqual(store.total_items, 3)

        store.remove_item("p-cap", "One Size")

        self.assertEqual(CartStore(storage).items, ())

    def test_round_trip_preserves_snapshot(self):
        store = CartStore(MemoryCartStorage())
        store.add_item(CAP, 2, "One Size")

        lines = deserialize_lines(serialize_lines(store.items))

        self.assertEqual(lines, store.items)

    def test_negative_quantity_in_storage_is_corrupt(self):
        raw = json.dumps([{"product": CAP.to_dict(), "quantity": -1, "size": "M"}])

        with self.assertRaises(CorruptCartError):
            deserialize_lines(raw)
