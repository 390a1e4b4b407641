import unittest

from imagescribe.core.data_uri import is_data_uri, parse_data_uri, to_data_uri

class TestDataUri(unittest.TestCase):

    def test_to_data_uri_prefix(self):
        uri = to_data_uri("image/png", b"\x89PNG")
        self.assertTrue(uri.startswith("data:image/png;base64,"))
        self.assertTrue(is_data_uri(uri))

    def test_parse_returns_mime_and_bytes(self):
        mime, raw = parse_data_uri("data:image/JPEG;base64,aGVsbG8=")
        self.assertEqual(mime, "image/jpeg")
        self.assertEqual(raw, b"hello")

    def test_rejects_missing_base64_marker(self):
        self.assertFalse(is_data_uri("data:image/png,hello"))
        with self.assertRaises(ValueError):
            parse_data_uri("https://example.com/cat.png")

    def test_rejects_bad_padding(self):
        with self.assertRaises(ValueError):
            parse_data_uri("data:image/png;base64,abc")

if __name__ == '__main__':
    unittest.main()
