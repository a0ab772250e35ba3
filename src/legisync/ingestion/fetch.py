"""
Source file retrieval.

Materializes a session's bill or roll XML files in a local directory:
either by mirroring GovTrack's bulk data over HTTP or by using files
that are already on disk.
"""
import logging
import posixpath
from pathlib import Path
from typing import Optional
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from legisync.config.settings import settings
from legisync.ingestion.results import FetchError, FetchResult

logger = logging.getLogger(__name__)


def xml_links(html: str, listing_url: str) -> dict[str, str]:
    """
    XML files linked from a directory listing, as {filename: absolute URL}.
    
    Links may be relative, rooted or absolute; only the last path segment
    names the local file.
    """
    soup = BeautifulSoup(html, "html.parser")
    links = {}
    for anchor in soup.find_all("a", href=True):
        url = urljoin(listing_url, anchor["href"])
        filename = posixpath.basename(urlparse(url).path)
        if filename.endswith(".xml") and filename not in links:
            links[filename] = url
    return links


def source_directory(data_dir: str | Path, session: int, kind: str) -> Path:
    """Where the XML files for a session live, e.g. data/govtrack/111/bills."""
    return Path(data_dir) / str(session) / kind


class LocalDirectoryFetcher:
    """
    Use files already on disk (synced by some other means).
    """
    
    def __init__(self, data_dir: str | Path = settings.DATA_DIR):
        self.data_dir = data_dir
    
    def fetch(self, session: int, kind: str) -> FetchResult:
        directory = source_directory(self.data_dir, session, kind)
        if not directory.is_dir():
            return FetchResult(ok=False, error=f"No such directory: {directory}")
        return FetchResult(ok=True, directory=directory, files=len(list(directory.glob("*.xml"))))


class HttpMirrorFetcher:
    """
    Mirror {base_url}/{session}/{kind}/*.xml into the local data directory.
    
    Usage:
        fetcher = HttpMirrorFetcher()
        result = fetcher.fetch(111, "bills")
    """
    
    def __init__(
        self,
        base_url: str = settings.SOURCE_MIRROR_URL,
        data_dir: str | Path = settings.DATA_DIR,
        timeout: float = settings.FETCH_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.data_dir = data_dir
        self.timeout = timeout
        self.transport = transport
    
    def fetch(self, session: int, kind: str) -> FetchResult:
        directory = source_directory(self.data_dir, session, kind)
        try:
            count = self._mirror(session, kind, directory)
        except (httpx.HTTPError, OSError, FetchError) as e:
            logger.error(f"Could not fetch {kind} for session {session}: {e}")
            return FetchResult(ok=False, error=str(e))
        
        logger.info(f"Mirrored {count} {kind} files for session {session} into {directory}")
        return FetchResult(ok=True, directory=directory, files=count)
    
    def _mirror(self, session: int, kind: str, directory: Path) -> int:
        directory.mkdir(parents=True, exist_ok=True)
        listing_url = f"{self.base_url}/{session}/{kind}/"
        
        with httpx.Client(timeout=self.timeout, transport=self.transport, follow_redirects=True) as client:
            response = client.get(listing_url)
            response.raise_for_status()
            
            links = xml_links(response.text, str(response.url))
            if not links:
                raise FetchError(f"No XML files listed at {listing_url}")
            
            for filename in sorted(links):
                file_response = client.get(links[filename])
                file_response.raise_for_status()
                (directory / filename).write_bytes(file_response.content)
        
        return len(links)
