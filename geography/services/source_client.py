from __future__ import annotations

import logging
from pathlib import Path

import requests

from geography.core.config import settings
from geography.core.errors import SourceError


logger = logging.getLogger(__name__)


class OurAirportsClient:
    """Downloads the OurAirports CSV exports into a local data directory."""

    def __init__(
        self,
        data_dir: str | Path | None = None,
        urls: dict[str, str] | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.data_dir = Path(data_dir or settings.data_dir)
        self.urls = urls or settings.source_urls
        self.session = session or requests.Session()
        self.timeout = timeout or settings.download_timeout_sec

    def path_for(self, entity: str) -> Path:
        url = self.urls.get(entity)
        if not url:
            raise SourceError(f"no source configured for {entity}")
        return self.data_dir / url.rsplit("/", 1)[-1]

    def download(self, entity: str, force: bool = False) -> Path:
        target = self.path_for(entity)
        if target.exists() and not force:
            logger.info("%s: using cached %s", entity, target)
            return target

        url = self.urls[entity]
        logger.info("%s: downloading %s", entity, url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise SourceError(f"{entity}: download of {url} failed: {exc}") from exc

        self.data_dir.mkdir(parents=True, exist_ok=True)
        partial = target.with_name(target.name + ".part")
        try:
            partial.write_bytes(response.content)
            partial.replace(target)
        except OSError as exc:
            raise SourceError(f"{entity}: cannot write {target}: {exc}") from exc
        return target


__all__ = ["OurAirportsClient"]
