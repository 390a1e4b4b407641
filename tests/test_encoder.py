import base64
import unittest

from imagescribe.client.encoder import encode
from imagescribe.client.errors import ReadError
from imagescribe.client.intake import ImageSource, UploadedImage

def uploaded(read, mime="image/png"):
    src = ImageSource(name="cat.png", mime_type=mime, size=4, read=read)
    return UploadedImage(source=src, mime_type=mime, size=4, preview_url="blob:test")

class TestEncode(unittest.IsolatedAsyncioTestCase):

    async def test_valid_image_yields_data_uri(self):
        uri = await encode(uploaded(lambda: b"\x89PNG"))
        self.assertTrue(uri.startswith("data:"))
        self.assertEqual(uri, "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode())

    async def test_reads_exactly_once(self):
        calls = []

        def read():
            calls.append(1)
            return b"abc"

        await encode(uploaded(read))
        self.assertEqual(len(calls), 1)

    async def test_empty_read_is_read_error(self):
        with self.assertRaises(ReadError) as ctx:
            await encode(uploaded(lambda: b""))
        self.assertEqual(str(ctx.exception), "Failed to read the image file.")

    async def test_os_error_is_read_error(self):
        def boom():
            raise FileNotFoundError("gone")

        with self.assertRaises(ReadError):
            await encode(uploaded(boom))

if __name__ == '__main__':
    unittest.main()
