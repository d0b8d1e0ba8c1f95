import base64

import requests
from google import genai
from google.genai import types

from .config import AppConfig
from .errors import VideoDownloadError

ASPECT_RATIOS = ("16:9", "9:16")


class GeminiVideoClient:
    """Thin wrapper around the google-genai SDK for Veo image-to-video generation."""

    def __init__(self, config: AppConfig, api_key: str, session: requests.Session | None = None) -> None:
        self._config = config
        self._api_key = api_key
        self._session = session or requests.Session()

    def _client(self) -> genai.Client:
        return genai.Client(api_key=self._api_key)

    def start(self, prompt: str, image_base64: str, mime_type: str, aspect_ratio: str):
        """
        Submit an image-to-video request and return the remote operation handle.
        """
        if aspect_ratio not in ASPECT_RATIOS:
            raise ValueError(f"Unsupported aspect ratio {aspect_ratio!r}; expected one of {ASPECT_RATIOS}.")

        return self._client().models.generate_videos(
            model=self._config.veo_model,
            prompt=prompt,
            image=types.Image(
                image_bytes=base64.b64decode(image_base64),
                mime_type=mime_type,
            ),
            config=types.GenerateVideosConfig(
                number_of_videos=1,
                resolution=self._config.resolution,
                aspect_ratio=aspect_ratio,
            ),
        )

    def refresh(self, operation):
        # A fresh SDK client per poll; the operation handle is passed back verbatim.
        return self._client().operations.get(operation)

    def download(self, uri: str) -> bytes:
        separator = "&" if "?" in uri else "?"
        response = self._session.get(
            f"{uri}{separator}key={self._api_key}",
            timeout=self._config.http_timeout_seconds,
        )
        if not response.ok:
            raise VideoDownloadError(response.reason or str(response.status_code), response.text)
        return response.content
