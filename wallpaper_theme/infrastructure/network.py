from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Callable
from urllib.parse import unquote_to_bytes

import requests
from PIL import Image, UnidentifiedImageError

from ..config import SETTINGS


SessionFactory = Callable[[], requests.Session]

LOGGER = logging.getLogger(__name__)

USER_AGENT = "wallpaper-theme/1.0.0"


class ImageLoadError(RuntimeError):
    """The wallpaper source could not be fetched or decoded."""


class UnsupportedSourceError(ImageLoadError):
    """The source names a scheme this fetcher refuses to read."""


def is_remote_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def is_data_uri(source: str) -> bool:
    return source[:5].lower() == "data:"


def _decode_data_uri(source: str) -> bytes:
    """Return the payload bytes of a ``data:`` URI.

    Base64 payloads are decoded strictly; anything else is treated as a
    percent-encoded literal, matching how browsers read ``data:`` URIs.
    """

    header, sep, payload = source[5:].partition(",")
    if not sep:
        raise ImageLoadError("Malformed data URI: missing ',' separator")

    if header.lower().endswith(";base64"):
        try:
            return base64.b64decode(unquote_to_bytes(payload), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ImageLoadError(f"Malformed base64 payload in data URI: {exc}") from exc
    return unquote_to_bytes(payload)


def decode_image(data: bytes) -> Image.Image:
    if not data:
        raise ImageLoadError("Empty image payload")
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ImageLoadError(f"Could not decode image: {exc}") from exc
    return image.convert("RGBA")


class SourceFetcher:
    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        timeout: float | None = None,
        allow_local: bool | None = None,
    ) -> None:
        self._session_factory = session_factory or requests.Session
        self._timeout = SETTINGS.timeout if timeout is None else timeout
        self._allow_local = SETTINGS.allow_local_sources if allow_local is None else allow_local
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update({"User-Agent": USER_AGENT})
        return session

    def fetch_bytes(self, source: str) -> bytes:
        if not isinstance(source, str) or not source.strip():
            raise ImageLoadError("Image source must be a non-empty string")
        source = source.strip()

        if is_data_uri(source):
            return _decode_data_uri(source)

        if is_remote_url(source):
            try:
                response = self._session.get(source, timeout=self._timeout)
                response.raise_for_status()
            except requests.RequestException as exc:
                raise ImageLoadError(f"Failed to fetch {source}: {exc}") from exc
            return response.content

        if not self._allow_local:
            raise UnsupportedSourceError("Image source must be an http(s) URL or a data: URI")

        path = Path(source).expanduser()
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ImageLoadError(f"Failed to read {path}: {exc}") from exc

    def fetch_source(self, source: str) -> Image.Image:
        data = self.fetch_bytes(source)
        image = decode_image(data)
        LOGGER.debug("Decoded %s image %dx%d", _describe(source), image.width, image.height)
        return image


def _describe(source: str) -> str:
    if is_data_uri(source):
        return "data-uri"
    if is_remote_url(source):
        return source
    return f"file {source}"


FETCHER = SourceFetcher()
