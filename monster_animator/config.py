import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv


def load_env_files(directory: str = ".") -> None:
    # .env.local wins over .env; neither overrides variables already set.
    base = Path(directory)
    load_dotenv(base / ".env.local")
    load_dotenv(base / ".env")


load_env_files()


@dataclass
class AppConfig:
    gemini_api_key: str | None = None
    port: int = 8080
    build_dir: str = "dist"
    veo_model: str = "veo-3.1-fast-generate-preview"
    resolution: str = "720p"
    poll_interval_seconds: float = 10.0
    message_interval_seconds: float = 5.0
    key_server_url: str = "http://localhost:8080"
    http_timeout_seconds: float = 60.0


def load_config() -> AppConfig:
    # Blank values count as unset. A missing GEMINI_API_KEY is not fatal here:
    # the server still has to start so the front end can report the problem.
    return AppConfig(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        port=int(os.getenv("PORT") or "8080"),
        build_dir=os.getenv("BUILD_DIR") or "dist",
        veo_model=os.getenv("VEO_MODEL") or "veo-3.1-fast-generate-preview",
        resolution=os.getenv("VIDEO_RESOLUTION") or "720p",
        poll_interval_seconds=float(os.getenv("POLL_INTERVAL_SECONDS") or "10"),
        message_interval_seconds=float(os.getenv("MESSAGE_INTERVAL_SECONDS") or "5"),
        key_server_url=os.getenv("KEY_SERVER_URL") or "http://localhost:8080",
        http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS") or "60"),
    )
