"""Payload sources: where the dogs JSON comes from."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from pupfinder.config import Config

logger = logging.getLogger(__name__)

BUNDLED_PAYLOAD = "dogs.json"


class PayloadSourceError(RuntimeError):
    """The payload could not be obtained (IO or transport failure)."""


class PayloadSource(ABC):
    @abstractmethod
    def fetch(self) -> str:
        """Return the raw payload text.

        Raises:
            PayloadSourceError: if the payload can't be read.
        """
        ...

    def close(self) -> None:
        pass

    def __enter__(self) -> "PayloadSource":
        return self

    def __exit__(self, *_) -> None:
        self.close()


class BundledPayloadSource(PayloadSource):
    """The data set shipped inside the package."""

    def __init__(self, name: str = BUNDLED_PAYLOAD):
        self.name = name

    def fetch(self) -> str:
        try:
            return (resources.files("pupfinder") / "data" / self.name).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PayloadSourceError(f"Could not read bundled payload {self.name}: {exc}") from exc

    def __repr__(self) -> str:
        return f"BundledPayloadSource({self.name!r})"


class FilePayloadSource(PayloadSource):
    def __init__(self, path: Path):
        self.path = Path(path)

    def fetch(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PayloadSourceError(f"Could not read {self.path}: {exc}") from exc

    def __repr__(self) -> str:
        return f"FilePayloadSource({str(self.path)!r})"


class HttpPayloadSource(PayloadSource):
    """Single GET against a payload endpoint. No retries."""

    def __init__(self, url: str, timeout: float = 10.0):
        self.url = url
        self._client = httpx.Client(timeout=timeout, follow_redirects=True)

    def fetch(self) -> str:
        try:
            resp = self._client.get(self.url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.debug("Payload request to %s failed: %s", self.url, exc)
            raise PayloadSourceError(f"Could not fetch {self.url}: {exc}") from exc
        return resp.text

    def close(self) -> None:
        self._client.close()

    def __repr__(self) -> str:
        return f"HttpPayloadSource({self.url!r})"


def make_source(config: "Config") -> PayloadSource:
    """Build the payload source selected by ``[source] kind``."""
    kind = config.source_kind
    if kind == "bundled":
        return BundledPayloadSource()
    if kind == "file":
        if config.source_path is None:
            raise ValueError("source.kind = 'file' requires source.path")
        return FilePayloadSource(config.source_path)
    if kind == "http":
        if not config.source_url:
            raise ValueError("source.kind = 'http' requires source.url")
        return HttpPayloadSource(config.source_url, timeout=config.source_timeout)
    raise ValueError(f"Unknown payload source kind: {kind!r}")
