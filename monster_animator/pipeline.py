import logging
import threading
import time
from typing import Callable, List

from .config import AppConfig
from .credentials import KeyProvider
from .errors import NotInitializedError, VideoGenerationError
from .gemini_client import GeminiVideoClient
from .media import GeneratedVideo

logger = logging.getLogger(__name__)

LOADING_MESSAGES: List[str] = [
    "Summoning creative spirits...",
    "Teaching your monster to dance...",
    "Coloring in the animation cells...",
    "Adding a sprinkle of magic...",
    "Checking the monster rulebook...",
    "Reticulating splines...",
    "Polishing the final frames...",
]


class LoadingMessageRotator:
    """
    Cycles through LOADING_MESSAGES on a background thread while the
    generation is polled. Purely cosmetic feedback.
    """

    def __init__(
        self,
        on_message: Callable[[str], None],
        interval_seconds: float,
        messages: List[str] | None = None,
    ) -> None:
        self._on_message = on_message
        self._interval = interval_seconds
        self._messages = messages or LOADING_MESSAGES
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def _run(self) -> None:
        index = 0
        while not self._stop.wait(self._interval):
            self._on_message(self._messages[index])
            index = (index + 1) % len(self._messages)

    def start(self) -> None:
        self._thread = threading.Thread(target=self._run, name="loading-messages", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None


class VideoGenerationPipeline:
    def __init__(
        self,
        config: AppConfig,
        keys: KeyProvider,
        client_factory: Callable[[AppConfig, str], GeminiVideoClient] = GeminiVideoClient,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._keys = keys
        self._client_factory = client_factory
        self._sleep = sleep

    def generate_video_from_image(
        self,
        prompt: str,
        image_base64: str,
        aspect_ratio: str,
        on_message: Callable[[str], None] = print,
        mime_type: str = "image/png",
    ) -> GeneratedVideo:
        """
        Run the whole remote generation:
        - resolve the API key
        - submit the image and prompt to Veo
        - poll the operation every poll interval until it reports done
        - download the resulting video
        """
        if not self._keys.initialized:
            raise NotInitializedError()

        key = self._keys.get_key()

        try:
            client = self._client_factory(self._config, key)

            on_message("Initializing animation sequence...")
            operation = client.start(prompt, image_base64, mime_type, aspect_ratio)

            rotator = LoadingMessageRotator(on_message, self._config.message_interval_seconds)
            rotator.start()
            on_message("The animation portal is open. Generating video...")

            try:
                # Fixed interval, no backoff and no cancellation.
                while not operation.done:
                    self._sleep(self._config.poll_interval_seconds)
                    operation = client.refresh(operation)
            finally:
                rotator.stop()

            on_message("Finalizing your video...")

            error = getattr(operation, "error", None)
            if error:
                message = error.get("message") if isinstance(error, dict) else None
                raise VideoGenerationError(message or str(error))

            download_link = _download_link(operation)
            if not download_link:
                raise VideoGenerationError("Video generation failed to produce a download link.")

            data = client.download(download_link)
            return GeneratedVideo(data=data, uri=download_link)
        except Exception as e:
            logger.error("Error during video generation: %s", e)
            # Studio keys are re-read on every call, only the cached server key can go stale.
            if not self._keys.studio and "permission" in str(e):
                self._keys.invalidate()
            raise


def _download_link(operation) -> str | None:
    response = getattr(operation, "response", None)
    videos = getattr(response, "generated_videos", None) if response is not None else None
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None) if video is not None else None
