import unittest
from unittest.mock import MagicMock

from sudokulink.engine.hash_store import HashStore, MemoryLocation


class HashStoreReadTests(unittest.TestCase):
    def test_read_parses_pairs_after_hash(self) -> None:
        store = HashStore(MemoryLocation("#puzzle=1004&seed=5"))
        self.assertEqual(store.read(), {"puzzle": "1004", "seed": "5"})

    def test_read_decodes_plus_and_percent(self) -> None:
        store = HashStore(MemoryLocation("note=a+b%21&x=%7E"))
        self.assertEqual(store.read(), {"note": "a b!", "x": "~"})

    def test_read_skips_empty_and_malformed_segments(self) -> None:
        store = HashStore(MemoryLocation("&&a=1&bogus&=x&b="))
        self.assertEqual(store.read(), {"a": "1", "b": ""})

    def test_read_keeps_unrecognized_keys(self) -> None:
        store = HashStore(MemoryLocation("seed=3&theme=dark"))
        self.assertEqual(store.read()["theme"], "dark")

    def test_read_of_empty_location(self) -> None:
        self.assertEqual(HashStore(MemoryLocation()).read(), {})


class HashStoreWriteTests(unittest.TestCase):
    def test_first_write_replaces_without_history(self) -> None:
        location = MemoryLocation()
        store = HashStore(location)
        store.write({"seed": 1, "puzzle": "10"})
        self.assertEqual(location.hash, "seed=1&puzzle=10")
        self.assertEqual(location.history, [])
        self.assertEqual(store.url(), "#seed=1&puzzle=10")

    def test_later_writes_create_history_entries(self) -> None:
        location = MemoryLocation()
        store = HashStore(location)
        store.write({"seed": "1"})
        store.write({"seed": "2"})
        self.assertEqual(location.history, ["seed=1"])

    def test_values_are_written_verbatim(self) -> None:
        location = MemoryLocation()
        HashStore(location).write({"work": "A-_b"})
        self.assertEqual(location.hash, "work=A-_b")

    def test_own_writes_do_not_notify_subscribers(self) -> None:
        location = MemoryLocation("seed=1")
        store = HashStore(location)
        callback = MagicMock()
        store.subscribe(callback)
        store.write({"seed": "2"})
        callback.assert_not_called()

    def test_external_navigation_notifies_subscribers(self) -> None:
        location = MemoryLocation("seed=1")
        store = HashStore(location)
        store.write({"seed": "2"})
        callback = MagicMock()
        store.subscribe(callback)

        self.assertTrue(location.back())
        callback.assert_called_once_with()
        self.assertEqual(store.read(), {"seed": "1"})

        location.assign("seed=7")
        self.assertEqual(callback.call_count, 2)

    def test_unsubscribe_stops_notifications(self) -> None:
        location = MemoryLocation("seed=1")
        store = HashStore(location)
        callback = MagicMock()
        store.subscribe(callback)
        store.unsubscribe(callback)
        location.assign("seed=2")
        callback.assert_not_called()

    def test_back_without_history(self) -> None:
        self.assertFalse(MemoryLocation("seed=1").back())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
