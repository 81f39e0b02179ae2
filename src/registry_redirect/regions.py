"""AWS region to S3 bucket routing.

Each bucket lives in one canonical region. Other regions are routed to the
bucket that is physically closest to them (and therefore _presumed_ lowest
latency). The first group is the catch-all default and also receives the
GLOBAL sentinel.

If you add a bucket, add a group for the region it is in, and consider
shifting other regions that do not have their own bucket.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .constants import BLOB_PATH_PREFIX, DIGEST_ALGORITHM, GLOBAL_REGION

_ENDPOINT_TEMPLATE = "https://prod-registry-k8s-io-{region}.s3.dualstack.{region}.amazonaws.com"


@dataclass(frozen=True)
class BucketGroup:
    """A bucket and the regions routed to it.

    Attributes:
        region: Region the bucket physically lives in
        endpoint: Base URL of the bucket
        aliases: Additional regions routed to this bucket
    """
    region: str
    endpoint: str
    aliases: Tuple[str, ...] = ()

    @classmethod
    def for_region(cls, region: str, *aliases: str) -> "BucketGroup":
        """Create a group whose endpoint follows the standard bucket naming."""
        return cls(
            region=region,
            endpoint=_ENDPOINT_TEMPLATE.format(region=region),
            aliases=tuple(aliases),
        )

    @property
    def regions(self) -> Tuple[str, ...]:
        """Canonical region followed by its aliases."""
        return (self.region,) + self.aliases


BUCKET_GROUPS: Tuple[BucketGroup, ...] = (
    # US East (N. Virginia)
    BucketGroup.for_region("us-east-1", "sa-east-1", "us-gov-east-1", GLOBAL_REGION),
    # US East (Ohio)
    BucketGroup.for_region("us-east-2", "ca-central-1"),
    # US West (N. California)
    BucketGroup.for_region("us-west-1", "us-gov-west-1"),
    # US West (Oregon)
    BucketGroup.for_region("us-west-2", "ca-west-1"),
    # Asia Pacific (Mumbai)
    BucketGroup.for_region("ap-south-1", "ap-south-2", "me-south-1", "me-central-1"),
    # Asia Pacific (Tokyo)
    BucketGroup.for_region("ap-northeast-1", "ap-northeast-2", "ap-northeast-3"),
    # Asia Pacific (Singapore)
    BucketGroup.for_region(
        "ap-southeast-1",
        "ap-southeast-2",
        "ap-southeast-3",
        "ap-southeast-4",
        "ap-southeast-6",
        "ap-east-1",
        "cn-northwest-1",
        "cn-north-1",
    ),
    # Europe (Frankfurt)
    BucketGroup.for_region("eu-central-1", "eu-central-2", "eu-south-1", "eu-south-2", "il-central-1"),
    # Europe (Ireland)
    BucketGroup.for_region("eu-west-1", "af-south-1"),
    # Europe (London)
    BucketGroup.for_region("eu-west-2", "eu-west-3", "eu-north-1"),
)


def _build_region_table(groups: Tuple[BucketGroup, ...]) -> Dict[str, str]:
    """Flatten bucket groups into a region -> endpoint table.

    Raises:
        ValueError: If a region is assigned to more than one bucket
    """
    table: Dict[str, str] = {}
    for group in groups:
        for region in group.regions:
            if region in table:
                raise ValueError(f"Region '{region}' is routed to more than one bucket")
            table[region] = group.endpoint
    return table


_REGION_TABLE = _build_region_table(BUCKET_GROUPS)
_GROUP_BY_REGION: Dict[str, BucketGroup] = {r: g for g in BUCKET_GROUPS for r in g.regions}


def aws_region_to_s3_url(region: str) -> str:
    """Return the base S3 bucket URL for layer blobs given the AWS region.

    Blobs in the buckets are stored at /containers/images/sha256:$hash

    We will not attempt to route to a region we do not know about. An empty
    string means no routing is available, the caller should fall back rather
    than retry.

    Args:
        region: AWS region code, or GLOBAL

    Returns:
        Bucket base URL, or "" for unknown regions
    """
    return _REGION_TABLE.get(region, "")


def bucket_group(region: str) -> Optional[BucketGroup]:
    """Return the bucket group a region routes to, or None."""
    return _GROUP_BY_REGION.get(region)


def default_endpoint() -> str:
    """Endpoint of the catch-all bucket."""
    return BUCKET_GROUPS[0].endpoint


def known_regions() -> List[str]:
    """List every region that routes to a bucket, in table order."""
    return list(_REGION_TABLE)


def blob_url(base_url: str, layer_hash: str) -> str:
    """Build the URL of a layer blob inside a bucket.

    Args:
        base_url: Bucket base URL from aws_region_to_s3_url
        layer_hash: Hex digest, with or without the sha256: prefix

    Returns:
        Full blob URL
    """
    prefix = f"{DIGEST_ALGORITHM}:"
    if not layer_hash.startswith(prefix):
        layer_hash = prefix + layer_hash
    return f"{base_url.rstrip('/')}{BLOB_PATH_PREFIX}{layer_hash}"
