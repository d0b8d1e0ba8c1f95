import logging
import os

import requests

from .config import AppConfig
from .errors import KeyNotSelectedError, KeyServerError, MissingKeyError

logger = logging.getLogger(__name__)

KEY_ENDPOINT = "/api/get-key"
STUDIO_KEY_ENV = "API_KEY"


class KeyProvider:
    """
    Resolves the API key used to talk to the video service.

    In studio mode the key is whatever the user selected in the hosted dev
    environment, exposed as the API_KEY environment variable, and it is read
    fresh on every call. Otherwise the key is fetched once from the key server
    and cached for the rest of the session.
    """

    def __init__(self, config: AppConfig, studio: bool = False, session: requests.Session | None = None) -> None:
        self._config = config
        self._studio = studio
        self._session = session or requests.Session()
        self._cached_key: str | None = None
        self._initialized = False

    @property
    def studio(self) -> bool:
        return self._studio

    @property
    def initialized(self) -> bool:
        return self._initialized

    def has_selected_key(self) -> bool:
        return bool(os.environ.get(STUDIO_KEY_ENV))

    def get_key(self) -> str:
        if self._studio:
            key = os.environ.get(STUDIO_KEY_ENV)
            if not key:
                raise KeyNotSelectedError()
            return key

        if self._cached_key:
            return self._cached_key

        url = f"{self._config.key_server_url.rstrip('/')}{KEY_ENDPOINT}"
        logger.info("Fetching API key from server at %s", url)
        try:
            response = self._session.get(url, timeout=self._config.http_timeout_seconds)
        except requests.RequestException as e:
            logger.error("Failed to reach the key server: %s", e)
            raise KeyServerError() from e

        if not response.ok:
            logger.error(
                "Failed to fetch API key from server. Status: %s %s", response.status_code, response.text
            )
            raise KeyServerError(status_code=response.status_code, body=response.text)

        try:
            data = response.json()
        except ValueError:
            data = {}
        key = data.get("apiKey") if isinstance(data, dict) else None
        if not key:
            raise MissingKeyError()

        self._cached_key = key
        return key

    def initialize(self) -> bool:
        """
        Check whether a key is available so generation can start.
        Returns False when the studio user still has to pick a key; real
        failures such as an unreachable key server are raised.
        """
        if self._studio and not self.has_selected_key():
            logger.info("API key not yet selected in studio environment.")
            self._initialized = False
            return False
        try:
            self.get_key()
        except KeyNotSelectedError:
            logger.info("API key not yet selected in studio environment.")
            self._initialized = False
            return False
        self._initialized = True
        return True

    def invalidate(self) -> None:
        self._cached_key = None
        self._initialized = False
