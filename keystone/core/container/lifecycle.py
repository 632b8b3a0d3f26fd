"""Process startup and shutdown for the identity subsystem.

Usage:
    async def main() -> None:
        await start_identity()
        try:
            ...
        finally:
            await stop_identity()
"""

from keystone.core.container.handlers import get_ensure_bootstrap_admin_handler
from keystone.core.container.infrastructure import (
    get_database,
    get_logger,
    get_rate_limiter,
)


async def start_identity(*, create_schema: bool = False) -> None:
    """Start background work and make sure the administrator exists.

    Args:
        create_schema: Create missing tables directly (development and
            tests). Production schemas are managed with Alembic.
    """
    logger = get_logger()
    database = get_database()
    if create_schema:
        await database.create_all()

    get_rate_limiter().start()
    await get_ensure_bootstrap_admin_handler().handle()
    logger.info("identity_started")


async def stop_identity() -> None:
    """Stop the limiter sweep and release the connection pool."""
    await get_rate_limiter().aclose()
    await get_database().close()
    get_logger().info("identity_stopped")
