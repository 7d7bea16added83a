"""Cache configuration entity."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass
class CacheConfig:
    """Cache configuration.

    Controls how the client uses its cache adapter.

    Key Mode:
        By default the cache key is the built document alone, so two
        executions of the same document with different variable values
        share one entry. Set ``vary_on_variables=True`` to append a hash
        of the variable values to the key.
    """

    enabled: bool = True

    # Overrides the adapter's freshness window when set
    ttl: int | timedelta | None = None
    key_prefix: str | None = None

    # Mutations change remote state and are always executed
    cache_mutations: bool = False

    vary_on_variables: bool = False

    def __post_init__(self) -> None:
        """Normalize the TTL to whole seconds."""
        if isinstance(self.ttl, timedelta):
            self.ttl = int(self.ttl.total_seconds())
        if self.ttl is not None and self.ttl < 0:
            raise ValueError("ttl must not be negative")
