import argparse
import logging
import sys

from monster_animator.config import load_config
from monster_animator.credentials import KeyProvider
from monster_animator.errors import InvalidImageError, user_message
from monster_animator.gemini_client import ASPECT_RATIOS
from monster_animator.media import load_image, save_video
from monster_animator.pipeline import VideoGenerationPipeline
from monster_animator.server import run_server

DEFAULT_PROMPT = "Animate this hand-drawn monster, making it fun and lively with playful movements."


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Animate a drawing or photo into a short video using Google Veo."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API key server and serve the front-end build.")
    serve.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on. Overrides PORT env var if provided.",
    )

    generate = sub.add_parser("generate", help="Generate a video from an image.")
    generate.add_argument(
        "--image",
        default=None,
        help="Path to the image to animate (PNG, JPG, GIF up to 10MB).",
    )
    generate.add_argument(
        "--prompt",
        default=DEFAULT_PROMPT,
        help="Text prompt describing how the image should be animated.",
    )
    generate.add_argument(
        "--aspect-ratio",
        default="16:9",
        choices=ASPECT_RATIOS,
        help="16:9 for landscape, 9:16 for portrait.",
    )
    generate.add_argument(
        "--output-dir",
        default="data/output",
        help="Directory to store the generated video.",
    )
    generate.add_argument(
        "--studio",
        action="store_true",
        help="Use the key selected in the studio environment (API_KEY) instead of the key server.",
    )
    generate.add_argument(
        "--key-server",
        default=None,
        help="Base URL of the key server. Overrides KEY_SERVER_URL env var if provided.",
    )
    return parser.parse_args(argv)


def generate(args: argparse.Namespace) -> int:
    cfg = load_config()
    if args.key_server:
        cfg.key_server_url = args.key_server

    if not args.image:
        print("Please upload an image of your monster first!")
        return 1
    if not args.prompt or not args.prompt.strip():
        print("Please provide a prompt to animate your monster!")
        return 1

    try:
        image_base64, mime_type = load_image(args.image)
    except InvalidImageError as e:
        print(user_message(e))
        return 1

    keys = KeyProvider(cfg, studio=args.studio)
    try:
        ready = keys.initialize()
    except Exception as e:
        print(user_message(e))
        return 1
    if not ready:
        print("An API key is required. Please select an API key and set API_KEY, then try again.")
        return 1

    pipeline = VideoGenerationPipeline(cfg, keys)
    try:
        video = pipeline.generate_video_from_image(
            prompt=args.prompt,
            image_base64=image_base64,
            aspect_ratio=args.aspect_ratio,
            on_message=print,
            mime_type=mime_type,
        )
    except Exception as e:
        print(user_message(e))
        return 1

    path = save_video(video, args.output_dir)
    print("Video generation completed.")
    print(f"- video: {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    if args.command == "serve":
        run_server(port=args.port)
        return 0
    return generate(args)


if __name__ == "__main__":
    sys.exit(main())
