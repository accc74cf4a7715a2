"""Slagboom.

Serve a greeting application behind http basic authentication.
"""

import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
import uvicorn

from . import __version__, make_app
from .accounts import DictAccounts
from .config import MainConfig
from .log import logger, LogLevels, init_logger


def main(
    *,
    cfg: Annotated[Path, typer.Option(help="Configuration file.")] = Path(
        "config.toml"
    ),
    log_dir: Annotated[Optional[Path], typer.Option(help="Log directory.")] = None,
    loglevel: Annotated[
        LogLevels, typer.Option(case_sensitive=False, help="Log level.")
    ] = "info",
    version: Annotated[bool, typer.Option(help="Print version and exit.")] = False,
):
    """Slagboom.

    Serve a greeting application behind http basic authentication.
    """
    if version:
        print(__version__)
        return

    debug = init_logger(LogLevels(loglevel), log_dir)

    with logger.catch(onerror=lambda _: sys.exit(1)):
        logger.info("Start server")

        config = MainConfig.from_file(cfg)
        if not config.accounts:
            logger.warning("No accounts configured, only exempt paths are reachable")

        app = make_app(
            DictAccounts(config.accounts),
            config.gate.realm,
            exempt=config.gate.exempt,
            debug=debug,
        )

        ssl_key = ssl_cert = None
        if config.server.ssl_key and config.server.ssl_cert:
            ssl_key = config.instance / config.server.ssl_key
            ssl_cert = config.instance / config.server.ssl_cert
            if not (ssl_key.exists() and ssl_cert.exists()):
                logger.warning("Ssl key or certificate not found, serving without ssl")
                ssl_key = ssl_cert = None
        ssl = ssl_key is not None
        logger.success(
            "Serving on {}://{}:{}",
            "https" if ssl else "http",
            config.server.host,
            config.server.port,
        )

        try:
            uvicorn.run(
                app,
                host=config.server.host,
                port=config.server.port,
                log_config={"version": 1, "disable_existing_loggers": False},
                log_level="debug",  # log everything, let loguru handle the filtering
                ssl_keyfile=ssl_key,
                ssl_certfile=ssl_cert,
            )
        except KeyboardInterrupt:
            pass

        logger.success("Complete")


def cli():
    typer.run(main)


if __name__ == "__main__":
    cli()
