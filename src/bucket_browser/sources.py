"""Named storage sources resolved from configuration."""

from typing import Callable, Optional

from botocore.exceptions import ClientError

from bucket_browser.core import get_logger
from bucket_browser.core.config import Settings
from bucket_browser.core.exceptions import ConfigurationError
from bucket_browser.objectstorage.clients import ObjectStore, S3ObjectStore
from bucket_browser.objectstorage.errors import backend_status_code
from bucket_browser.objectstorage.models import BackendSource
from bucket_browser.schemas import S3SourceConfig

logger = get_logger(__name__)


class SourceRegistry:
    """Holds every configured source and picks the default one."""

    def __init__(self, sources: list[BackendSource], default_source: Optional[str] = None):
        if not sources:
            raise ConfigurationError(
                "No S3 sources configured. Define at least one under "
                "'BUCKET_BROWSER_SOURCES__<name>__*'"
            )
        self._sources = {source.name: source for source in sources}
        if default_source and default_source in self._sources:
            self._default_name = default_source
        else:
            self._default_name = sources[0].name
        logger.info(
            "Source registry initialized",
            sources=list(self._sources),
            default_source=self._default_name,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        store_factory: Callable[[S3SourceConfig], ObjectStore] = S3ObjectStore.from_config,
    ) -> "SourceRegistry":
        """Build one store per configured source, keeping configuration order."""
        sources = [
            BackendSource(
                name=name,
                display_name=config.display_name or name.replace("-", " "),
                default_bucket=config.default_bucket,
                store=store_factory(config),
            )
            for name, config in settings.sources.items()
        ]
        return cls(sources, default_source=settings.default_source)

    @property
    def sources(self) -> list[BackendSource]:
        return list(self._sources.values())

    @property
    def default_source(self) -> BackendSource:
        return self._sources[self._default_name]

    def exists(self, name: str) -> bool:
        return name in self._sources

    def resolve(self, name: Optional[str]) -> BackendSource:
        """Return the named source; blank or unknown names give the default."""
        if not name or not name.strip():
            return self.default_source
        return self._sources.get(name, self.default_source)

    def list_buckets(self, source: BackendSource) -> list[str]:
        """List bucket names, falling back to the default bucket when denied."""
        try:
            return source.store.list_all_buckets()
        except ClientError as e:
            if backend_status_code(e) in (401, 403):
                logger.warning(
                    "Bucket listing denied, using default bucket",
                    source=source.name,
                    bucket=source.default_bucket,
                )
                return [source.default_bucket]
            raise
