"""Uvicorn runner."""

import logging
from typing import Optional

import uvicorn

from log import get_logger
from models.config import ServiceConfiguration, TLSConfiguration

logger = get_logger(__name__)


def tls_key_password(tls_config: TLSConfiguration) -> Optional[str]:
    """Read the TLS key password from the configured password file."""
    if tls_config.tls_key_password is None:
        return None
    return tls_config.tls_key_password.read_text(encoding="utf-8").strip()


def start_uvicorn(configuration: ServiceConfiguration, verbose: bool = False) -> None:
    """Start Uvicorn-based REST API service."""
    logger.info("Starting Uvicorn on %s:%d", configuration.host, configuration.port)

    log_level = logging.DEBUG if verbose else logging.INFO

    # please note:
    # TLS fields can be None, which means we will pass those values as None to uvicorn.run
    uvicorn.run(
        "app.main:app",
        host=configuration.host,
        port=configuration.port,
        workers=configuration.workers,
        log_level=log_level,
        ssl_keyfile=configuration.tls_config.tls_key_path,
        ssl_certfile=configuration.tls_config.tls_certificate_path,
        ssl_keyfile_password=tls_key_password(configuration.tls_config),
        use_colors=configuration.color_log,
        access_log=configuration.access_log,
    )
