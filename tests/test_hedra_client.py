"""
Unit tests for the Hedra character video client.
"""

import json
import os
import unittest
from unittest.mock import AsyncMock, patch

import httpx

from ugc_video.exceptions import (
    ConfigurationError,
    NoArtifactError,
    ProviderOperationError,
    ProviderPollError,
    ProviderSubmitError,
    ProviderTimeoutError,
)
from ugc_video.logger import get_request_logger
from ugc_video.models import GenerationRequest, Operation
from ugc_video.providers.hedra_provider import HedraAPIClient, HedraConfig, SpeechSynthesizer
from ugc_video.providers.hedra_provider.tts import PLACEHOLDER_AUDIO_URL, PlaceholderSpeechSynthesizer

BASE_URL = "https://api.hedra.com/v1"
VIDEO_URL = "https://cdn.hedra.example/videos/vid-1.mp4"


class FakeSynthesizer(SpeechSynthesizer):

    def __init__(self):
        self.calls = []

    async def synthesize(self, text, voice_accent):
        self.calls.append((text, voice_accent))
        return "https://audio.example/narration.mp3"


def make_request(**overrides):
    fields = {
        "script_text": "Hello from Hedra",
        "reference_image": "data:image/png;base64,AAAA",
        "direction": "Nodding enthusiastically",
        "provider": "hedra",
        "voice_accent": "indian",
    }
    fields.update(overrides)
    return GenerationRequest(**fields)


class HedraClientTestCase(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.calls = []
        self.character_response = httpx.Response(200, json={"character_id": "char-1"})
        self.video_response = httpx.Response(200, json={"video_id": "vid-1"})
        self.status_responses = []
        self.download_response = httpx.Response(200, content=b"hedra-video")
        self.synthesizer = FakeSynthesizer()

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        url = str(request.url)
        if url == f"{BASE_URL}/characters":
            return self.character_response
        if url == f"{BASE_URL}/videos":
            return self.video_response
        if url == f"{BASE_URL}/videos/vid-1":
            return self.status_responses.pop(0)
        if url == VIDEO_URL:
            return self.download_response
        return httpx.Response(404)

    async def asyncSetUp(self):
        self.http_client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        self.client = HedraAPIClient(
            HedraConfig(api_key="hedra-key"),
            self.http_client,
            speech_synthesizer=self.synthesizer,
        )

    async def asyncTearDown(self):
        await self.http_client.aclose()


class TestHedraConfig(unittest.TestCase):

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_api_key_raises(self):
        with self.assertRaises(ConfigurationError):
            HedraConfig.from_environment()

    @patch.dict(os.environ, {"HEDRA_API_KEY": "k", "HEDRA_MODEL": "character-2"}, clear=True)
    def test_from_environment(self):
        config = HedraConfig.from_environment()
        self.assertEqual(config.api_key, "k")
        self.assertEqual(config.default_model, "character-2")
        self.assertEqual(config.base_url, BASE_URL)

    def test_client_rejects_empty_key(self):
        with self.assertRaises(ConfigurationError):
            HedraAPIClient(HedraConfig(api_key=""), http_client=None)


class TestSubmit(HedraClientTestCase):

    async def test_submit_creates_character_then_video(self):
        operation = await self.client.submit(make_request())

        self.assertEqual(operation, Operation(name="vid-1"))
        character_call, video_call = self.calls
        self.assertEqual(character_call.headers["Authorization"], "Bearer hedra-key")
        self.assertEqual(json.loads(character_call.content), {
            "image": "AAAA",
            "aspect_ratio": "9:16",
            "model": "character-3",
        })
        self.assertEqual(json.loads(video_call.content), {
            "character_id": "char-1",
            "audio_url": "https://audio.example/narration.mp3",
            "motion_description": "Nodding enthusiastically",
            "duration": 8,
        })
        self.assertEqual(self.synthesizer.calls, [("Hello from Hedra", "indian")])

    async def test_request_model_overrides_default(self):
        await self.client.submit(make_request(model="character-2"))
        self.assertEqual(json.loads(self.calls[0].content)["model"], "character-2")

    async def test_character_error_raises(self):
        self.character_response = httpx.Response(401, json={"message": "Invalid API key"})

        with self.assertRaises(ProviderSubmitError) as ctx:
            await self.client.submit(make_request())

        self.assertEqual(ctx.exception.status_code, 401)
        self.assertIn("Invalid API key", str(ctx.exception))
        self.assertEqual(len(self.calls), 1)

    async def test_missing_character_id_raises(self):
        self.character_response = httpx.Response(200, json={})

        with self.assertRaises(ProviderSubmitError):
            await self.client.submit(make_request())

    async def test_missing_video_id_raises(self):
        self.video_response = httpx.Response(200, json={"status": "queued"})

        with self.assertRaises(ProviderSubmitError):
            await self.client.submit(make_request())


@patch("ugc_video.providers.hedra_provider.hedra_client.asyncio.sleep", new_callable=AsyncMock)
class TestGenerate(HedraClientTestCase):

    async def test_generate_downloads_completed_video(self, mock_sleep):
        self.status_responses.extend([
            httpx.Response(200, json={"status": "processing"}),
            httpx.Response(200, json={"status": "completed", "video_url": VIDEO_URL}),
        ])

        artifact = await self.client.generate(make_request())

        self.assertEqual(artifact.data, b"hedra-video")
        self.assertEqual(artifact.mime_type, "video/mp4")
        mock_sleep.assert_awaited_once_with(HedraAPIClient.POLL_INTERVAL_SECONDS)

    async def test_completed_without_url_keeps_polling(self, mock_sleep):
        self.status_responses.extend([
            httpx.Response(200, json={"status": "completed"}),
            httpx.Response(200, json={"status": "completed", "video_url": VIDEO_URL}),
        ])

        await self.client.generate(make_request())

        self.assertEqual(mock_sleep.await_count, 1)

    async def test_failed_status_raises(self, mock_sleep):
        self.status_responses.append(
            httpx.Response(200, json={"status": "failed", "error": {"message": "Face not detected"}})
        )

        with self.assertRaises(ProviderOperationError) as ctx:
            await self.client.generate(make_request())

        self.assertIn("Face not detected", str(ctx.exception))

    async def test_poll_error_status_raises(self, mock_sleep):
        self.status_responses.append(httpx.Response(500, text="Internal Server Error"))

        with self.assertRaises(ProviderPollError) as ctx:
            await self.client.generate(make_request())

        self.assertEqual(ctx.exception.status_code, 500)

    async def test_times_out_after_max_attempts(self, mock_sleep):
        self.status_responses.extend(
            httpx.Response(200, json={"status": "processing"}) for _ in range(HedraAPIClient.MAX_ATTEMPTS)
        )

        with self.assertRaises(ProviderTimeoutError) as ctx:
            await self.client.generate(make_request())

        self.assertEqual(ctx.exception.attempts, 30)
        self.assertEqual(self.status_responses, [])
        self.assertEqual(mock_sleep.await_count, 29)

    async def test_download_failure_raises_no_artifact(self, mock_sleep):
        self.status_responses.append(httpx.Response(200, json={"status": "completed", "video_url": VIDEO_URL}))
        self.download_response = httpx.Response(404)

        with self.assertRaises(NoArtifactError):
            await self.client.generate(make_request())

    async def test_non_string_video_url_raises_no_artifact(self, mock_sleep):
        operation = Operation(name="vid-1", done=True, response={"status": "completed", "video_url": ["a"]})

        with self.assertRaises(NoArtifactError):
            await self.client.extract_artifact(operation)


class TestPlaceholderSpeechSynthesizer(HedraClientTestCase):

    async def test_returns_placeholder_and_warns(self):
        synthesizer = PlaceholderSpeechSynthesizer()

        with self.assertLogs("ugc_video", level="WARNING"):
            audio_url = await synthesizer.synthesize("Hello", "american")

        self.assertEqual(audio_url, PLACEHOLDER_AUDIO_URL)

    async def test_default_placeholder_warns_with_request_id(self):
        client = HedraAPIClient(
            HedraConfig(api_key="hedra-key"),
            self.http_client,
            logger=get_request_logger("vid_1_hedratest"),
        )

        with self.assertLogs("ugc_video", level="WARNING") as logs:
            await client.submit(make_request())

        self.assertEqual(len(logs.output), 1)
        self.assertIn("[vid_1_hedratest]", logs.output[0])
        self.assertEqual(json.loads(self.calls[-1].content)["audio_url"], PLACEHOLDER_AUDIO_URL)


if __name__ == "__main__":
    unittest.main()
