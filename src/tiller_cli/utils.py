import logging
from typing import Optional

import httpx
from rich.console import Console

from tiller_cli.api import SchedulerAPI
from tiller_cli.config import CLISettings

logger = logging.getLogger(__name__)

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)


def get_client(address: Optional[str] = None, token: Optional[str] = None) -> SchedulerAPI:
    """Build an API client; explicit arguments override the environment."""
    settings = CLISettings()
    headers: dict[str, str] = {}
    token = token or settings.token
    if token:
        headers["Authorization"] = f"Bearer {token}"
    base_url = address or settings.address
    logger.debug(f"Using control plane at {base_url}")
    http = httpx.Client(base_url=base_url, headers=headers, timeout=settings.timeout)
    return SchedulerAPI(http, owns_client=True)
