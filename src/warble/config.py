"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(eager_compile=True)
    """

    # Method used when ``Router.is_valid`` receives a bare path string
    default_method: str = "GET"

    # Compile each route's pattern as it is registered instead of on
    # first match. Use when the tree is shared read-only across threads.
    eager_compile: bool = False

    # Logger receiving routing debug records
    logger_name: str = "warble.routing"
