import unittest

from imagescribe.client.renderer import Placeholder, SessionSnapshot, render
from imagescribe.client.state import CaptionResult, DescriptionResult, Operation, RequestState

PREVIEW = dict(preview_url="blob:imagescribe/1", preview_label="cat.png (1.00 KB)")

class TestRender(unittest.TestCase):

    def test_idle_without_image(self):
        view = render(SessionSnapshot(state=RequestState.idle()))
        self.assertFalse(view.triggers_enabled)
        self.assertEqual(view.cards, ())
        self.assertIsNone(view.banner)

    def test_loading_caption_placeholders_sized_to_count(self):
        snap = SessionSnapshot(state=RequestState.loading(Operation.CAPTION), caption_count=3, **PREVIEW)
        view = render(snap)
        self.assertFalse(view.triggers_enabled)
        self.assertEqual(view.busy_label, "Generating Caption...")
        self.assertEqual(view.placeholders, (Placeholder("heading"),) + (Placeholder("line"),) * 3)
        self.assertEqual(view.cards, ())

    def test_loading_describe_placeholder(self):
        view = render(SessionSnapshot(state=RequestState.loading(Operation.DESCRIBE), **PREVIEW))
        self.assertEqual(view.placeholders, (Placeholder("heading"), Placeholder("block")))

    def test_two_captions_two_cards_in_order(self):
        snap = SessionSnapshot(state=RequestState.success(Operation.CAPTION),
                               captions=CaptionResult(("a cat", "a dog")), **PREVIEW)
        view = render(snap)
        self.assertEqual([c.text for c in view.cards], ["a cat", "a dog"])
        self.assertTrue(view.triggers_enabled)
        self.assertIsNone(view.speech)

    def test_description_offers_speech(self):
        snap = SessionSnapshot(state=RequestState.success(Operation.DESCRIBE),
                               description=DescriptionResult("A red bicycle."), **PREVIEW)
        view = render(snap)
        self.assertEqual(len(view.cards), 1)
        self.assertEqual(view.speech.label, "Read aloud")

        speaking = render(SessionSnapshot(state=snap.state, description=snap.description, speaking=True, **PREVIEW))
        self.assertEqual(speaking.speech.label, "Stop")

    def test_failed_shows_banner(self):
        view = render(SessionSnapshot(state=RequestState.failed("Failed to describe image: boom"), **PREVIEW))
        self.assertEqual(view.banner.message, "Failed to describe image: boom")
        self.assertEqual(view.cards, ())

if __name__ == '__main__':
    unittest.main()
