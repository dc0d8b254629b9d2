"""Resource Manager for CDK stacks."""

from dataclasses import dataclass
from typing import Dict, Any, Optional

from aws_cdk import Duration, RemovalPolicy

from .image_reference import ImageReference, parse_image_uri

DEFAULT_NAME_PREFIX = "agent"
DEFAULT_MEMORY_SIZE = 1024
DEFAULT_TIMEOUT = 900

# Lambda limits
MIN_MEMORY_SIZE, MAX_MEMORY_SIZE = 128, 10240
MIN_TIMEOUT, MAX_TIMEOUT = 1, 900

@dataclass
class Config:
    """Configuration class for stack resources."""
    image_uri: str
    memory_size: int
    timeout: int
    name_prefix: str
    auto_delete_objects: bool
    env_name: str
    account: str
    region: str

def _parse_int(value: Any, name: str, default: int, minimum: int, maximum: int) -> int:
    if value is None or value == "":
        return default
    # bool is an int subclass; floats must not be truncated
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{name} must be an integer, got '{value}'")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{name} must be an integer, got '{value}'")
    try:
        parsed = int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{value}'")
    if not minimum <= parsed <= maximum:
        raise ValueError(f"{name} must be between {minimum} and {maximum}, got {parsed}")
    return parsed

def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() == "true"

class ResourceManager:
    """Manages resource naming and configuration."""

    QUEUE_VISIBILITY_MULTIPLIER = 6
    OUTPUT_QUEUE_VISIBILITY_TIMEOUT = 30
    QUEUE_RETENTION_DAYS = 14

    def __init__(self, config: Dict[str, Any]) -> None:
        """Initialize ResourceManager with configuration.

        Raises:
            ValueError: If the image URI is missing or any value is invalid
        """
        self._raw_config = config

        image_uri = (config.get('image_uri') or '').strip()
        if not image_uri:
            raise ValueError("imageUri environment variable is required")

        self.config = Config(
            image_uri=image_uri,
            memory_size=_parse_int(
                config.get('memory_size'), 'memorySize', DEFAULT_MEMORY_SIZE, MIN_MEMORY_SIZE, MAX_MEMORY_SIZE
            ),
            timeout=_parse_int(
                config.get('timeout'), 'timeout', DEFAULT_TIMEOUT, MIN_TIMEOUT, MAX_TIMEOUT
            ),
            name_prefix=(config.get('name_prefix') or '').strip() or DEFAULT_NAME_PREFIX,
            auto_delete_objects=_parse_bool(config.get('auto_delete_objects')),
            env_name=config.get('env_name', 'dev'),
            account=config.get('account', ''),
            region=config.get('region', '')
        )
        self.env_name = self.config.env_name
        self.image: ImageReference = parse_image_uri(image_uri)

    @property
    def raw_config(self) -> Dict[str, Any]:
        """Get the raw configuration dictionary."""
        return self._raw_config

    @property
    def function_timeout(self) -> Duration:
        return Duration.seconds(self.config.timeout)

    @property
    def input_queue_visibility_timeout(self) -> Duration:
        """Visibility timeout for the queue feeding the function."""
        return Duration.seconds(self.config.timeout * self.QUEUE_VISIBILITY_MULTIPLIER)

    @property
    def output_queue_visibility_timeout(self) -> Duration:
        return Duration.seconds(self.OUTPUT_QUEUE_VISIBILITY_TIMEOUT)

    @property
    def queue_retention_period(self) -> Duration:
        return Duration.days(self.QUEUE_RETENTION_DAYS)

    @property
    def removal_policy(self) -> RemovalPolicy:
        """Removal policy for stateful resources."""
        return RemovalPolicy.DESTROY if self.config.auto_delete_objects else RemovalPolicy.RETAIN

    def generate_resource_name(self, stack_name: str, role: Optional[str] = None) -> str:
        """Generate a standardized, lowercase resource name."""
        parts = [self.config.name_prefix, role, stack_name]
        return "-".join(part for part in parts if part).lower()
