#!/usr/bin/env python3
"""
UGC Video Generator CLI

Generate a vertical 8-second talking video from a script and a reference
image using one of the supported backends:
- Veo (Google Vertex AI)
- Hedra (character videos)
- Kling (not yet implemented)

Usage:
    ./ugc2video.py --script "Hi, I love this product" --image face.png
    ./ugc2video.py --provider hedra --script "Hello" --image face.jpg -o hello.mp4
    ./ugc2video.py --request request.json

For detailed usage information, run:
    ./ugc2video.py --help
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from ugc_video import generate_video
from ugc_video.config import get_available_providers
from ugc_video.exceptions import (
    APIError,
    ConfigurationError,
    ProviderNotImplementedError,
    ValidationError,
    VideoGenerationError,
)
from ugc_video.logger import init_library_logger
from ugc_video.media_utils import image_file_to_data_uri
from ugc_video.models import DEFAULT_PROVIDER, SUPPORTED_PROVIDERS

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_CANCELLED = 130


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ugc2video.py",
        description="Generate UGC talking videos from a script and a reference image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Veo with the default UGC style and American voice
  ugc2video.py --script "This serum changed my skin" --image selfie.png

  # Legacy-style request body from a file
  ugc2video.py --request request.json -o out.mp4

  # Hedra character video with a custom model
  ugc2video.py --provider hedra --model character-3 --script "Hi" --image face.jpg

Configuration:
  Veo:   GOOGLE_SERVICE_ACCOUNT_JSON, GOOGLE_APPLICATION_CREDENTIALS or
         VEO_ACCESS_TOKEN with VEO_PROJECT_ID
  Hedra: HEDRA_API_KEY
  Kling: KLING_API_KEY
        """
    )

    parser.add_argument(
        "--request",
        help="Path to a JSON request body (canonical or legacy field names)"
    )

    parser.add_argument(
        "-s", "--script",
        help="Script text the character speaks"
    )

    parser.add_argument(
        "-d", "--direction",
        default="",
        help="Scene or motion direction (optional)"
    )

    parser.add_argument(
        "-i", "--image",
        help="Reference image: a local file or a data URI"
    )

    parser.add_argument(
        "--provider",
        choices=SUPPORTED_PROVIDERS,
        help=f"Video generation provider (default: {DEFAULT_PROVIDER})"
    )

    parser.add_argument(
        "--style",
        help="Video style: 'UGC Talking', 'Narrative Voiceover' or 'Cinematic'"
    )

    parser.add_argument(
        "--accent",
        help="Voice accent, e.g. american, british-female (default: american)"
    )

    parser.add_argument(
        "--country",
        help="Setting country (default: United States)"
    )

    parser.add_argument(
        "--model",
        help="Provider model override (Hedra)"
    )

    parser.add_argument(
        "-o", "--output",
        help="Output video file path (default: <provider>_output.mp4)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output for detailed processing information"
    )

    return parser


def _resolve_image(image: str) -> str:
    if image.startswith("data:"):
        return image
    return image_file_to_data_uri(image)


def build_request(args: argparse.Namespace) -> dict:
    """
    Build the raw request body from parsed arguments.

    A ``--request`` file is the starting point; individual flags override
    its fields.

    Raises:
        ValueError: If neither a request file nor a script is given
        FileNotFoundError: If the request file or image does not exist
    """
    raw = {}
    if args.request:
        path = Path(args.request)
        if not path.is_file():
            raise FileNotFoundError(f"Request file not found: {args.request}")
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError("Request file must contain a JSON object")
    elif not args.script:
        raise ValueError("Provide --script and --image, or --request")

    overrides = {
        "scriptText": args.script,
        "direction": args.direction or None,
        "provider": args.provider,
        "videoStyle": args.style,
        "voiceAccent": args.accent,
        "country": args.country,
        "model": args.model,
    }
    raw.update({key: value for key, value in overrides.items() if value})

    if args.image:
        raw["referenceImage"] = _resolve_image(args.image)

    return raw


def _check_providers_and_display_header():
    """Check available providers and display application header."""
    print("🎬 UGC Video Generator")
    print("=" * 50)

    available_providers = get_available_providers()
    if available_providers:
        print(f"📋 Available providers: {', '.join(available_providers)}")
    else:
        print("⚠️  No provider credentials found in the environment")
    return available_providers


def _handle_exceptions(e) -> int:
    """Display an error message for ``e`` and return the exit code."""
    request_id = getattr(e, "request_id", None)
    suffix = f" (request {request_id})" if request_id else ""

    if isinstance(e, ValidationError):
        print(f"❌ Invalid request: {e}{suffix}")
        return EXIT_USAGE
    elif isinstance(e, ConfigurationError):
        print(f"❌ Configuration error: {e}{suffix}")
        print("   Check your environment variables and API credentials")
        return EXIT_FAILURE
    elif isinstance(e, ProviderNotImplementedError):
        print(f"❌ {e}{suffix}")
        return EXIT_FAILURE
    elif isinstance(e, APIError):
        status = f" [HTTP {e.status_code}]" if e.status_code else ""
        print(f"❌ {e.provider or 'Provider'} API error{status}: {e}{suffix}")
        return EXIT_FAILURE
    elif isinstance(e, VideoGenerationError):
        print(f"❌ Video generation failed: {e}{suffix}")
        return EXIT_FAILURE
    elif isinstance(e, FileNotFoundError):
        print(f"❌ File error: {e}")
        print("   Check that the image and request files exist")
        return EXIT_USAGE
    elif isinstance(e, ValueError):
        print(f"❌ {e}")
        return EXIT_USAGE
    else:
        print(f"❌ Unexpected error: {e}")
        return EXIT_FAILURE


def main(argv=None) -> int:
    """Main entry point for the CLI application."""
    parser = create_parser()
    args = parser.parse_args(argv)

    init_library_logger(verbose=args.verbose, log_to_file=True)
    _check_providers_and_display_header()

    try:
        raw_request = build_request(args)
        provider = raw_request.get("provider") or DEFAULT_PROVIDER
        output = Path(args.output or f"{provider}_output.mp4")

        print(f"🎯 Using provider: {provider}")
        print("\n🚀 Starting video generation...")
        print("=" * 50)

        result = asyncio.run(generate_video(raw_request))

        output.write_bytes(result.artifact.data)
        print("\n✅ Video generated successfully!")
        print(f"   Request: {result.request_id}")
        print(f"   Output saved to: {output}")
        print(f"   File size: {len(result.artifact.data) / (1024 * 1024):.1f} MB")
        return EXIT_SUCCESS

    except KeyboardInterrupt:
        print("\n👋 Video generation cancelled by user")
        return EXIT_CANCELLED
    except (VideoGenerationError, FileNotFoundError, ValueError) as e:
        return _handle_exceptions(e)


if __name__ == "__main__":
    sys.exit(main())
