"""Blob existence checks with a positive-result cache."""

import logging
from typing import Optional, Protocol

import requests

from .blob_cache import BlobCache
from .config import RedirectorSettings

logger = logging.getLogger(__name__)


class BlobChecker(Protocol):
    """
    Protocol for checking whether a blob exists, possibly with caching.
    """

    def blob_exists(self, blob_url: str, bucket: str, layer_hash: str) -> bool:
        """
        Check that blob_url exists.

        Args:
            blob_url: Full URL of the blob
            bucket: Bucket key, may be used for caching
            layer_hash: Layer digest, may be used for caching

        Returns:
            True only if the blob is known to exist
        """
        ...


class CachedBlobChecker:
    """
    HTTP HEAD check against the blob, remembering blobs that exist.

    Network errors and any status other than 200 OK are reported as "does
    not exist" and are not cached, so they are probed again next time.
    Concurrent callers may probe the same uncached blob more than once.
    """

    def __init__(
        self,
        session: requests.Session,
        cache: Optional[BlobCache] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize checker.

        Args:
            session: HTTP session used for probes (shared connection pool)
            cache: Existence cache, a new empty one if omitted
            timeout: Per-probe timeout in seconds, None defers to the session
        """
        self.session = session
        self.cache = cache if cache is not None else BlobCache()
        self.timeout = timeout

    def blob_exists(self, blob_url: str, bucket: str, layer_hash: str) -> bool:
        if self.cache.get(bucket, layer_hash):
            logger.debug("blob existence cache hit: %s", blob_url)
            return True
        logger.debug("blob existence cache miss: %s", blob_url)

        try:
            response = self.session.head(blob_url, allow_redirects=False, timeout=self.timeout)
        except requests.RequestException as e:
            # fall back to assuming blob is unavailable on errors
            logger.debug("blob existence probe failed for %s: %s", blob_url, e)
            return False

        try:
            status = response.status_code
        finally:
            response.close()

        # if the blob exists HEAD should return 200 OK
        # this is true for S3 and for OCI registries
        if status == requests.codes.ok:
            self.cache.put(bucket, layer_hash)
            return True
        logger.debug("blob existence probe for %s returned %s", blob_url, status)
        return False


def make_blob_checker(settings: Optional[RedirectorSettings] = None) -> CachedBlobChecker:
    """
    Create a checker with its own session and empty cache.

    Args:
        settings: Redirector settings, defaults if omitted

    Returns:
        CachedBlobChecker ready to be shared across request handlers
    """
    settings = settings or RedirectorSettings()
    # requests has no client-level timeout, so it is passed on each HEAD
    return CachedBlobChecker(requests.Session(), BlobCache(), timeout=settings.probe_timeout)
