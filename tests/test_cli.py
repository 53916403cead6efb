"""
Tests for the ugc2video.py command line interface.
"""

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

import ugc2video
from ugc_video.exceptions import (
    ConfigurationError,
    MissingFieldError,
    ProviderNotImplementedError,
    ProviderTimeoutError,
)
from ugc_video.models import Artifact, VideoResult

IMAGE_URI = "data:image/png;base64,AAAA"


class TestBuildRequest(unittest.TestCase):

    def setUp(self):
        self.parser = ugc2video.create_parser()

    def test_flags_become_canonical_fields(self):
        args = self.parser.parse_args([
            "--script", "Hello", "--image", IMAGE_URI, "--provider", "hedra",
            "--accent", "british-female", "--style", "Cinematic", "--direction", "Smile",
        ])
        self.assertEqual(ugc2video.build_request(args), {
            "scriptText": "Hello",
            "direction": "Smile",
            "referenceImage": IMAGE_URI,
            "provider": "hedra",
            "videoStyle": "Cinematic",
            "voiceAccent": "british-female",
        })

    def test_local_image_is_encoded(self):
        with tempfile.TemporaryDirectory() as tmp:
            image = Path(tmp) / "face.png"
            image.write_bytes(b"png")
            args = self.parser.parse_args(["--script", "Hi", "--image", str(image)])

            raw = ugc2video.build_request(args)

        self.assertEqual(raw["referenceImage"], "data:image/png;base64,cG5n")

    def test_request_file_with_overrides(self):
        with tempfile.TemporaryDirectory() as tmp:
            request_file = Path(tmp) / "request.json"
            request_file.write_text(json.dumps({
                "prompt": 'Wave. Script: "Hey". Style: UGC',
                "imageUrl": IMAGE_URI,
                "provider": "veo",
            }))
            args = self.parser.parse_args(["--request", str(request_file), "--provider", "kling"])

            raw = ugc2video.build_request(args)

        self.assertEqual(raw["prompt"], 'Wave. Script: "Hey". Style: UGC')
        self.assertEqual(raw["provider"], "kling")
        self.assertNotIn("scriptText", raw)

    def test_missing_script_and_request_raises(self):
        args = self.parser.parse_args(["--image", IMAGE_URI])
        with self.assertRaises(ValueError):
            ugc2video.build_request(args)

    def test_missing_request_file_raises(self):
        args = self.parser.parse_args(["--request", "/nonexistent/request.json"])
        with self.assertRaises(FileNotFoundError):
            ugc2video.build_request(args)

    def test_invalid_provider_exits(self):
        with self.assertRaises(SystemExit) as cm:
            self.parser.parse_args(["--provider", "sora", "--script", "Hi"])
        self.assertEqual(cm.exception.code, 2)


class TestHandleExceptions(unittest.TestCase):

    @patch("builtins.print")
    def test_exit_codes(self, mock_print):
        self.assertEqual(ugc2video._handle_exceptions(MissingFieldError("scriptText")), ugc2video.EXIT_USAGE)
        self.assertEqual(ugc2video._handle_exceptions(ConfigurationError("no key")), ugc2video.EXIT_FAILURE)
        self.assertEqual(
            ugc2video._handle_exceptions(ProviderNotImplementedError("not yet", provider="kling")),
            ugc2video.EXIT_FAILURE,
        )
        self.assertEqual(
            ugc2video._handle_exceptions(ProviderTimeoutError("timed out", provider="veo", attempts=60)),
            ugc2video.EXIT_FAILURE,
        )
        self.assertEqual(ugc2video._handle_exceptions(FileNotFoundError("x")), ugc2video.EXIT_USAGE)

    @patch("builtins.print")
    def test_request_id_is_reported(self, mock_print):
        error = ConfigurationError("no key", request_id="vid_1_abcdefghi")
        ugc2video._handle_exceptions(error)
        printed = " ".join(str(call.args[0]) for call in mock_print.call_args_list)
        self.assertIn("vid_1_abcdefghi", printed)


@patch("builtins.print")
@patch("ugc2video.init_library_logger")
class TestMain(unittest.TestCase):

    def test_writes_video_to_default_path(self, mock_init_logger, mock_print):
        artifact = Artifact(data=b"video-bytes")
        result = VideoResult.from_artifact(artifact, provider="hedra", request_id="vid_1_abcdefghi")

        with tempfile.TemporaryDirectory() as tmp:
            output = Path(tmp) / "out.mp4"
            with patch("ugc2video.generate_video", new_callable=AsyncMock, return_value=result) as mock_generate:
                code = ugc2video.main([
                    "--script", "Hi", "--image", IMAGE_URI, "--provider", "hedra", "-o", str(output),
                ])
            self.assertEqual(output.read_bytes(), b"video-bytes")

        self.assertEqual(code, ugc2video.EXIT_SUCCESS)
        raw_request = mock_generate.await_args.args[0]
        self.assertEqual(raw_request["provider"], "hedra")
        mock_init_logger.assert_called_once_with(verbose=False, log_to_file=True)

    def test_generation_error_returns_failure(self, mock_init_logger, mock_print):
        error = ProviderNotImplementedError("Kling integration not yet implemented", provider="kling")
        with patch("ugc2video.generate_video", new_callable=AsyncMock, side_effect=error):
            code = ugc2video.main(["--script", "Hi", "--image", IMAGE_URI, "--provider", "kling"])

        self.assertEqual(code, ugc2video.EXIT_FAILURE)

    def test_missing_script_returns_usage(self, mock_init_logger, mock_print):
        with patch("ugc2video.generate_video", new_callable=AsyncMock) as mock_generate:
            code = ugc2video.main(["--image", IMAGE_URI])

        self.assertEqual(code, ugc2video.EXIT_USAGE)
        mock_generate.assert_not_awaited()


if __name__ == "__main__":
    unittest.main()
