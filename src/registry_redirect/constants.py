"""Constants for registry-redirect."""

# Sentinel region routed to the default bucket
GLOBAL_REGION = "GLOBAL"

# Layer blobs live at <bucket>/containers/images/sha256:<hash>
BLOB_PATH_PREFIX = "/containers/images/"
DIGEST_ALGORITHM = "sha256"

# Configuration
CONFIG_DIR = ".registry-redirect"
CONFIG_FILE = "config.yaml"
ENV_PREFIX = "REGISTRY_REDIRECT_"

DEFAULT_PROBE_TIMEOUT = 10.0

# Version
REDIRECT_VERSION = "0.1.0"
