"""ECR container image reference parsing."""

import re
from dataclasses import dataclass
from typing import Optional

DEFAULT_TAG = "latest"

# <account>.dkr.ecr[-fips].<region>.amazonaws.com[.cn]
ECR_REGISTRY_PATTERN = re.compile(
    r"^(?P<account>\d{12})\.dkr\.ecr(?:-fips)?\.(?P<region>[a-z0-9-]+)\.amazonaws\.com(?P<china>\.cn)?$"
)

@dataclass(frozen=True)
class ImageReference:
    """A container image split into its registry, repository and tag or digest."""
    registry: str
    repository: str
    tag: str = DEFAULT_TAG
    digest: Optional[str] = None

    @property
    def tag_or_digest(self) -> str:
        return self.digest or self.tag

    def repository_arn(self) -> Optional[str]:
        """ARN of the repository in the registry's own account and region, or None for non-ECR registries."""
        match = ECR_REGISTRY_PATTERN.match(self.registry)
        if match is None:
            return None
        partition = "aws-cn" if match.group("china") else "aws"
        return (
            f"arn:{partition}:ecr:{match.group('region')}:{match.group('account')}"
            f":repository/{self.repository}"
        )

def parse_image_uri(uri: str) -> ImageReference:
    """Parse an image URI of the form ``<registry>/<repository>[:<tag>|@<digest>]``.

    Args:
        uri: Image URI, e.g. ``123456789012.dkr.ecr.us-east-1.amazonaws.com/my-agent:v1``

    Returns:
        The parsed ImageReference

    Raises:
        ValueError: If the registry or repository part is missing
    """
    uri = (uri or "").strip()
    if not uri:
        raise ValueError("Image URI must not be empty")

    registry, sep, remainder = uri.partition("/")
    if not sep or not registry or not remainder:
        raise ValueError(f"Invalid image URI '{uri}': expected <registry>/<repository>[:<tag>]")

    digest = None
    tag = DEFAULT_TAG
    if "@" in remainder:
        remainder, digest = remainder.split("@", 1)
        if not digest:
            raise ValueError(f"Invalid image URI '{uri}': empty digest")
    else:
        # Only a colon after the last slash separates the tag
        last_segment = remainder.rsplit("/", 1)[-1]
        if ":" in last_segment:
            remainder, tag = remainder.rsplit(":", 1)
            if not tag:
                raise ValueError(f"Invalid image URI '{uri}': empty tag")

    if not remainder or remainder.endswith("/"):
        raise ValueError(f"Invalid image URI '{uri}': missing repository name")

    return ImageReference(registry=registry, repository=remainder, tag=tag, digest=digest)
