import json
import unittest

import httpx

from imagescribe.client.errors import RequestError
from imagescribe.client.proxy_client import ProxyClient
from imagescribe.client.state import CaptionResult, DescriptionResult, Operation

URI = "data:image/png;base64,aGVsbG8="

def proxy(handler) -> ProxyClient:
    return ProxyClient(base_url="http://proxy.test", transport=httpx.MockTransport(handler))

class TestProxyClient(unittest.IsolatedAsyncioTestCase):

    async def test_captions_in_order(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True, "captions": ["a cat", "a dog"]})

        client = proxy(handler)
        out = await client.request(URI, Operation.CAPTION)
        await client.aclose()
        self.assertEqual(out, CaptionResult(captions=("a cat", "a dog")))
        self.assertEqual(seen["path"], "/api/v1/flows/generate-image-captions")
        self.assertEqual(seen["body"], {"photoDataUri": URI})

    async def test_single_caption_shape(self):
        client = proxy(lambda req: httpx.Response(200, json={"caption": "a lone tree"}))
        out = await client.request(URI, Operation.CAPTION)
        self.assertEqual(out.captions, ("a lone tree",))

    async def test_describe(self):
        client = proxy(lambda req: httpx.Response(200, json={"ok": True, "description": "A red bicycle."}))
        out = await client.request(URI, Operation.DESCRIBE)
        self.assertEqual(out, DescriptionResult(text="A red bicycle."))

    async def test_error_body_is_wrapped_verbatim(self):
        client = proxy(lambda req: httpx.Response(502, json={"ok": False, "error": "model service returned 500: boom"}))
        with self.assertRaises(RequestError) as ctx:
            await client.request(URI, Operation.CAPTION)
        self.assertEqual(ctx.exception.message, "model service returned 500: boom")
        self.assertEqual(str(ctx.exception), "Failed to generate caption: model service returned 500: boom")

    async def test_validation_detail_is_used(self):
        body = {"detail": [{"loc": ["body", "photoDataUri"], "msg": "Value error, bad uri", "type": "value_error"}]}
        client = proxy(lambda req: httpx.Response(422, json=body))
        with self.assertRaises(RequestError) as ctx:
            await client.request(URI, Operation.DESCRIBE)
        self.assertEqual(ctx.exception.message, "Value error, bad uri")

    async def test_plain_text_error(self):
        client = proxy(lambda req: httpx.Response(500, text="Internal Server Error"))
        with self.assertRaises(RequestError) as ctx:
            await client.request(URI, Operation.DESCRIBE)
        self.assertEqual(ctx.exception.message, "proxy returned HTTP 500")

    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(RequestError) as ctx:
            await proxy(handler).request(URI, Operation.DESCRIBE)
        self.assertEqual(str(ctx.exception), "Failed to describe image: connection refused")

    async def test_missing_field(self):
        client = proxy(lambda req: httpx.Response(200, json={"ok": True}))
        with self.assertRaises(RequestError):
            await client.request(URI, Operation.DESCRIBE)

if __name__ == '__main__':
    unittest.main()
