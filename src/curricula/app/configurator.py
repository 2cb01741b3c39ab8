"""
Application Configurator

Builds the document store, resolver and web application from an
ApplicationConfig, in the right order.
"""

import contextlib
import logging
from typing import AsyncIterator, Optional

from starlette.applications import Starlette

from ..adapters.starlette import create_app
from ..persistence.base import DocumentStore
from ..persistence.memory import MemoryStore
from .config import ApplicationConfig, PersistenceConfig, configure_logging
from .fixtures import seed_fixtures
from .resolver import UnitResolver

logger = logging.getLogger(__name__)


def create_store(config: PersistenceConfig) -> DocumentStore:
    """Instantiate the configured store backend."""
    if config.backend == "memory":
        return MemoryStore()
    if config.backend == "firestore":
        # Optional extra: curricula[firestore]
        from ..persistence.firestore import FirestoreStore
        return FirestoreStore.from_settings(project=config.project, database=config.database)
    raise ValueError(f"Unknown store backend: {config.backend!r}")


def configure_app(config: Optional[ApplicationConfig] = None,
                  store: Optional[DocumentStore] = None) -> Starlette:
    """
    Configure a curricula web application.

    Args:
        config: Application configuration; read from the environment if omitted
        store: Store to serve instead of the configured backend

    Returns:
        Starlette app that closes the store on shutdown
    """
    config = config or ApplicationConfig.from_env()
    configure_logging(config.logging)
    logger.info(f"Configuring curricula ({config.environment.value})")

    store = store or create_store(config.persistence)
    resolver = UnitResolver(store)
    if config.persistence.seed_fixtures:
        seed_fixtures(resolver)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        try:
            yield
        finally:
            store.close()

    app = create_app(resolver, debug=config.debug, lifespan=lifespan)
    app.state.store = store
    app.state.resolver = resolver
    app.state.config = config
    logger.info(f"Curricula configured with {store.__class__.__name__}")
    return app
