"""
One-time provisioning of the blog admin user.

Usage:
    python -m blogadmin.provision --email admin@example.com

The password is prompted for (twice) and hashed before it reaches Redis.
"""

import asyncio
import logging
import logging.config as log_config

import click

from blogadmin.config.provider import EnvConfigProvider
from blogadmin.logging_config import get_logging_config
from blogadmin.modules.auth import AuthError, AuthFactory
from blogadmin.modules.config import get_config
from blogadmin.modules.storage import StorageModule

logger = logging.getLogger(__name__)


async def provision_admin(email: str, password: str) -> str:
    """Create the admin principal in the configured Redis and return its id."""
    storage = StorageModule.from_config(get_config())
    redis_client = await storage.connect()
    try:
        service = AuthFactory.build(EnvConfigProvider(), redis_client)
        principal = await service.provision(email, password)
    finally:
        await storage.disconnect()

    logger.info(f"Provisioned admin user {principal.id}")
    return principal.id


@click.command()
@click.option("--email", "email", required=True, help="Admin email address")
@click.password_option("--password", "password", help="Admin password")
def main(email: str, password: str):
    log_config.dictConfig(get_logging_config(get_config().get("log_level")))

    try:
        principal_id = asyncio.run(provision_admin(email, password))
    except (AuthError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Admin user created: {principal_id}")


if __name__ == "__main__":
    main()
