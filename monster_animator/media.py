import base64
import mimetypes
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from .errors import InvalidImageError

MAX_IMAGE_BYTES = 10 * 1024 * 1024
DEFAULT_IMAGE_MIME = "image/png"


@dataclass
class GeneratedVideo:
    data: bytes
    uri: str
    mime_type: str = "video/mp4"
    created_at: float = field(default_factory=time.time)

    @property
    def filename(self) -> str:
        return f"monster-animation-{int(self.created_at * 1000)}.mp4"


def load_image(path: str) -> Tuple[str, str]:
    """
    Read an image file and return (base64_data, mime_type).
    Files that are not images or are larger than 10MB are rejected.
    """
    image_path = Path(path)
    if not image_path.is_file():
        raise InvalidImageError(f"Image file not found: {image_path}")

    guessed, _ = mimetypes.guess_type(image_path.name)
    if guessed and not guessed.startswith("image/"):
        raise InvalidImageError(f"{image_path.name} is not an image ({guessed}).")

    data = image_path.read_bytes()
    if not data:
        raise InvalidImageError(f"{image_path.name} is empty.")
    if len(data) > MAX_IMAGE_BYTES:
        raise InvalidImageError(f"{image_path.name} is larger than 10MB.")

    return base64.b64encode(data).decode("ascii"), guessed or DEFAULT_IMAGE_MIME


def save_video(video: GeneratedVideo, output_dir: str) -> Path:
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / video.filename
    path.write_bytes(video.data)
    return path
