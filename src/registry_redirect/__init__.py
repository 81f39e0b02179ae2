"""Region routing and cached blob existence checks for a registry redirector."""

from .blob_cache import BlobCache
from .checker import BlobChecker, CachedBlobChecker, make_blob_checker
from .constants import REDIRECT_VERSION
from .regions import BUCKET_GROUPS, BucketGroup, aws_region_to_s3_url, blob_url, known_regions

__version__ = REDIRECT_VERSION

__all__ = [
    "BUCKET_GROUPS",
    "BlobCache",
    "BlobChecker",
    "BucketGroup",
    "CachedBlobChecker",
    "aws_region_to_s3_url",
    "blob_url",
    "known_regions",
    "make_blob_checker",
]
