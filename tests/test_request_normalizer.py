"""
Unit tests for inbound request normalization.

Covers canonical and legacy field conventions, the legacy prompt markers,
defaults and the missing-field failures.
"""

import unittest

from ugc_video.exceptions import MissingFieldError, ValidationError
from ugc_video.request_normalizer import normalize_request, split_legacy_prompt

IMAGE = "data:image/png;base64,AAAA"


class TestSplitLegacyPrompt(unittest.TestCase):

    def test_both_markers_present(self):
        script, direction = split_legacy_prompt(
            'Smile warmly at the camera. Script: "Buy it today". Style: UGC Talking'
        )
        self.assertEqual(script, "Buy it today")
        self.assertEqual(direction, "Smile warmly at the camera")

    def test_no_markers_whole_prompt_is_script(self):
        script, direction = split_legacy_prompt("Just say hello")
        self.assertEqual(script, "Just say hello")
        self.assertEqual(direction, "")

    def test_missing_end_marker_whole_prompt_is_script(self):
        prompt = 'Wave. Script: "Hello there'
        self.assertEqual(split_legacy_prompt(prompt), (prompt, ""))

    def test_script_may_contain_quotes(self):
        script, _ = split_legacy_prompt('Nod. Script: "I said "wow" out loud". Style: x')
        self.assertEqual(script, 'I said "wow" out loud')


class TestNormalizeRequest(unittest.TestCase):

    def test_canonical_fields(self):
        request = normalize_request({
            "scriptText": "Hi there",
            "direction": "Wave",
            "referenceImage": IMAGE,
            "provider": "hedra",
            "country": "Canada",
            "videoStyle": "Cinematic",
            "voiceAccent": "british",
            "styleParams": {"mood": "upbeat"},
            "model": "character-2",
        })
        self.assertEqual(request.script_text, "Hi there")
        self.assertEqual(request.direction, "Wave")
        self.assertEqual(request.reference_image, IMAGE)
        self.assertEqual(request.provider, "hedra")
        self.assertEqual(request.country, "Canada")
        self.assertEqual(request.video_style, "Cinematic")
        self.assertEqual(request.voice_accent, "british")
        self.assertEqual(request.style_params, {"mood": "upbeat"})
        self.assertEqual(request.model, "character-2")

    def test_defaults(self):
        request = normalize_request({"scriptText": "Hi", "referenceImage": IMAGE})
        self.assertEqual(request.direction, "")
        self.assertEqual(request.country, "United States")
        self.assertEqual(request.provider, "veo")
        self.assertEqual(request.video_style, "UGC Talking")
        self.assertEqual(request.voice_accent, "american")
        self.assertIsNone(request.style_params)
        self.assertIsNone(request.model)

    def test_legacy_prompt_and_image_url(self):
        request = normalize_request({
            "prompt": 'Hold the bottle up. Script: "This changed my mornings". Style: UGC',
            "imageUrl": IMAGE,
        })
        self.assertEqual(request.script_text, "This changed my mornings")
        self.assertEqual(request.direction, "Hold the bottle up")
        self.assertEqual(request.reference_image, IMAGE)

    def test_legacy_prompt_without_markers(self):
        request = normalize_request({"prompt": "Hello world", "imageUrl": IMAGE})
        self.assertEqual(request.script_text, "Hello world")
        self.assertEqual(request.direction, "")

    def test_canonical_fields_win_over_legacy(self):
        request = normalize_request({
            "scriptText": "Canonical script",
            "prompt": 'Legacy direction. Script: "Legacy script". Style: x',
            "referenceImage": IMAGE,
            "imageUrl": "data:image/png;base64,BBBB",
        })
        self.assertEqual(request.script_text, "Canonical script")
        self.assertEqual(request.direction, "Legacy direction")
        self.assertEqual(request.reference_image, IMAGE)

    def test_missing_script_raises(self):
        with self.assertRaises(MissingFieldError) as ctx:
            normalize_request({"referenceImage": IMAGE})
        self.assertEqual(ctx.exception.field, "scriptText")

    def test_blank_script_raises(self):
        with self.assertRaises(MissingFieldError):
            normalize_request({"scriptText": "   ", "referenceImage": IMAGE})

    def test_missing_image_raises(self):
        with self.assertRaises(MissingFieldError) as ctx:
            normalize_request({"scriptText": "Hi"})
        self.assertEqual(ctx.exception.field, "referenceImage")

    def test_missing_field_is_a_validation_error(self):
        with self.assertRaises(ValidationError):
            normalize_request({})

    def test_unknown_provider_raises(self):
        with self.assertRaises(ValidationError):
            normalize_request({"scriptText": "Hi", "referenceImage": IMAGE, "provider": "sora"})

    def test_provider_tag_is_case_insensitive(self):
        request = normalize_request({"scriptText": "Hi", "referenceImage": IMAGE, "provider": "Kling"})
        self.assertEqual(request.provider, "kling")

    def test_inbound_mapping_not_mutated(self):
        raw = {"prompt": 'D. Script: "S". Style: x', "imageUrl": IMAGE}
        snapshot = dict(raw)
        normalize_request(raw)
        self.assertEqual(raw, snapshot)


if __name__ == "__main__":
    unittest.main()
