import asyncio
import logging

import click
import uvicorn

from figlog import configure_logging
from figstore.postgres.session import init_db, create_tables, dispose_db

from apisvc.config import ApiSettings
from apisvc.service import ApiService

logger = logging.getLogger(__name__)


async def _serve_http(settings: ApiSettings) -> None:
    service = ApiService(settings)
    await service.start()

    from apisvc.http.app import app
    from apisvc.http.router.public import set_public_service
    from apisvc.http.router.admin import set_admin_service

    set_public_service(service.public)
    set_admin_service(service.admin)

    config = uvicorn.Config(
        app,
        host=settings.http_host,
        port=settings.http_port,
        log_level="info",
    )
    server = uvicorn.Server(config)

    logger.info(
        f"starting api http server on {settings.http_host}:{settings.http_port}"
    )

    try:
        await server.serve()
    finally:
        await service.stop()


async def _create_tables(settings: ApiSettings) -> None:
    init_db(settings.postgres_settings())
    try:
        await create_tables()
    finally:
        await dispose_db()


@click.group()
def cli():
    """figflag api service cli."""
    configure_logging("apisvc")


@cli.command()
@click.option("--host", default=None, help="http server host")
@click.option("--port", default=None, type=int, help="http server port")
@click.option(
    "--cache-backend",
    type=click.Choice(["redis", "memory"]),
    default=None,
    help="snapshot cache backend",
)
def serve(host: str | None, port: int | None, cache_backend: str | None) -> None:
    """run the http server."""
    svc_settings = ApiSettings()
    if host:
        svc_settings.http_host = host
    if port:
        svc_settings.http_port = port
    if cache_backend:
        svc_settings.snapshot_cache_backend = cache_backend
    asyncio.run(_serve_http(svc_settings))


@cli.command()
def create_db() -> None:
    """create record store tables."""
    asyncio.run(_create_tables(ApiSettings()))
    click.echo("tables created")


if __name__ == "__main__":
    cli()
