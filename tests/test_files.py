"""Unit tests for app.services.files: image naming and storage."""

import tempfile
import unittest
from pathlib import Path

from app.core.errors import FileStorageError
from app.services.files import DEFAULT_IMAGE_EXTENSION, delete_image, image_extension, save_image


class TestImageExtension(unittest.TestCase):
    def test_lowercases_suffix(self) -> None:
        self.assertEqual(image_extension("Photo.JPEG"), ".jpeg")

    def test_missing_name_or_suffix_uses_default(self) -> None:
        self.assertEqual(image_extension(None), DEFAULT_IMAGE_EXTENSION)
        self.assertEqual(image_extension("photo"), DEFAULT_IMAGE_EXTENSION)


class TestSaveImage(unittest.TestCase):
    def test_writes_under_unique_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "nested"
            first = save_image(b"abc", "a.png", target)
            second = save_image(b"abc", "a.png", target)
            self.assertNotEqual(first, second)
            self.assertTrue(first.endswith(".png"))
            self.assertEqual((target / first).read_bytes(), b"abc")

    def test_unwritable_directory_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_bytes(b"")
            with self.assertRaises(FileStorageError) as ctx:
                save_image(b"abc", "a.png", blocker / "sub")
            self.assertEqual(ctx.exception.status_code, 500)


class TestDeleteImage(unittest.TestCase):
    def test_removes_stored_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            stored = save_image(b"abc", "a.png", tmp)
            delete_image(stored, tmp)
            self.assertEqual(list(Path(tmp).iterdir()), [])

    def test_missing_file_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            delete_image("gone.png", tmp)


if __name__ == "__main__":
    unittest.main()
