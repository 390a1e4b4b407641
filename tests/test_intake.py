import unittest

from imagescribe.client.errors import ValidationError
from imagescribe.client.intake import ImageIntake, ImageSource, InMemoryPreviewUrlRegistry

class RecordingRegistry(InMemoryPreviewUrlRegistry):
    """Keeps an ordered log of create/revoke calls."""

    def __init__(self):
        super().__init__()
        self.log = []
        self.max_live = 0

    def create(self, source):
        url = super().create(source)
        self.log.append(("create", url))
        self.max_live = max(self.max_live, len(self.live))
        return url

    def revoke(self, url):
        super().revoke(url)
        self.log.append(("revoke", url))

def image(name="cat.png", data=b"\x89PNG....", mime="image/png"):
    return ImageSource.from_bytes(name, data, mime)

class TestImageIntake(unittest.TestCase):

    def setUp(self):
        self.registry = RecordingRegistry()
        self.intake = ImageIntake(self.registry)

    def test_non_image_rejected_and_nothing_selected(self):
        with self.assertRaises(ValidationError) as ctx:
            self.intake.select(image("notes.txt", b"hello", "text/plain"))
        self.assertEqual(str(ctx.exception), "Invalid file type. Please upload an image.")
        self.assertIsNone(self.intake.current)
        self.assertEqual(self.registry.live, set())

    def test_rejection_keeps_previous_image(self):
        first = self.intake.select(image())
        with self.assertRaises(ValidationError):
            self.intake.select(image("movie.mp4", b"....", "video/mp4"))
        self.assertIs(self.intake.current, first)
        self.assertEqual(self.registry.live, {first.preview_url})

    def test_second_selection_revokes_first_before_creating(self):
        first = self.intake.select(image("a.png"))
        second = self.intake.select(image("b.jpg", mime="image/jpeg"))
        self.assertEqual(self.registry.log, [
            ("create", first.preview_url),
            ("revoke", first.preview_url),
            ("create", second.preview_url),
        ])
        self.assertEqual(self.registry.live, {second.preview_url})
        self.assertEqual(self.registry.max_live, 1)

    def test_release_revokes(self):
        self.intake.select(image())
        self.intake.release()
        self.assertIsNone(self.intake.current)
        self.assertEqual(self.registry.live, set())

    def test_label_shows_size_in_kb(self):
        up = self.intake.select(image("cat.png", b"x" * 2048))
        self.assertEqual(up.label, "cat.png (2.00 KB)")

    def test_from_path_guesses_mime(self):
        src = ImageSource.from_path("/nonexistent/photo.jpeg")
        self.assertEqual(src.mime_type, "image/jpeg")
        self.assertEqual(src.size, 0)

if __name__ == '__main__':
    unittest.main()
