import tempfile
import unittest
from pathlib import Path

from homestock.config import Settings
from homestock.dependencies import build_image_store, build_repository
from homestock.schemas import Article
from homestock.services.image_store import OwnerKind


class DependenciesTest(unittest.TestCase):
    def test_repository_and_images_share_data_dir(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            settings = Settings(DATA_DIR=tmp_dir, DOCUMENT_NAME="home.json", THUMBNAIL_SIZE=64)

            repository = build_repository(settings)
            repository.load()
            repository.add_or_update_article(Article(id=1, name="Milk"))

            images = build_image_store(settings)
            images.save(OwnerKind.ARTICLE, 1, 1, b"raw")

            self.assertTrue((Path(tmp_dir) / "home.json").is_file())
            self.assertTrue((Path(tmp_dir) / "images" / "article" / "1_1.jpg").is_file())
            self.assertEqual(
                images.thumbnail_path(OwnerKind.ARTICLE, 1, 1),
                "images/article/thumbnails/1_1_64x64.jpg",
            )

            reloaded = build_repository(settings)
            reloaded.load()
            self.assertEqual(reloaded.get_article_by_id(1).name, "Milk")


if __name__ == "__main__":
    unittest.main()
