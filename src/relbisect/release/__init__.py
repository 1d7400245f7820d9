"""Release listing, version ranges and runtime provisioning."""

from relbisect.release.lister import RateLimitedError, ReleaseLister
from relbisect.release.provision import ProvisioningError, Provisioner
from relbisect.release.version import (
    VersionParseError,
    build_range,
    parse_version,
    resolve_range,
)

__all__ = [
    "ProvisioningError",
    "Provisioner",
    "RateLimitedError",
    "ReleaseLister",
    "VersionParseError",
    "build_range",
    "parse_version",
    "resolve_range",
]
