import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from homestock.storage.blob_storage import BlobStorage, LocalBlobStorage, backup_name


class LocalBlobStorageTest(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.storage = LocalBlobStorage(self.root, clock=lambda: datetime(2024, 5, 6, 7, 8, 9))

    def tearDown(self):
        self._tmp.cleanup()

    def test_implements_protocol(self):
        self.assertIsInstance(self.storage, BlobStorage)

    def test_absent_files(self):
        self.assertEqual(self.storage.read_text("inventory.json"), "")
        self.assertIsNone(self.storage.read_bytes("images/article/1_1.jpg"))
        self.storage.delete_file("images/article/1_1.jpg")

    def test_round_trip_creates_directories(self):
        self.storage.write_bytes("images/article/1_1.jpg", b"\xff\xd8data")
        self.storage.write_text("inventory.json", '{"articles": []}')

        self.assertEqual(self.storage.read_bytes("images/article/1_1.jpg"), b"\xff\xd8data")
        self.assertEqual((self.root / "inventory.json").read_text(encoding="utf-8"), '{"articles": []}')
        self.assertEqual(
            self.storage.list_files(),
            ["images/article/1_1.jpg", "inventory.json"],
        )
        self.assertEqual(self.storage.list_files("images"), ["images/article/1_1.jpg"])
        self.assertEqual(self.storage.list_files("missing"), [])

    def test_rejects_paths_outside_root(self):
        with self.assertRaises(ValueError):
            self.storage.write_text("../escape.json", "{}")

    def test_backup_creates_timestamped_siblings(self):
        self.storage.write_text("inventory.json", "first")

        first = self.storage.backup_file("inventory.json")
        second = self.storage.backup_file("inventory.json")

        self.assertEqual(first, "inventory_20240506_070809.json")
        self.assertEqual(second, "inventory_20240506_070809_1.json")
        self.assertEqual(self.storage.read_text(first), "first")

    def test_backup_of_missing_file(self):
        self.assertIsNone(self.storage.backup_file("inventory.json"))

    def test_backup_name_keeps_directory(self):
        self.assertEqual(backup_name("data/inv.json", "X", 2), "data/inv_X_2.json")


if __name__ == "__main__":
    unittest.main()
