"""Taskcluster artifact urls and fetches."""
import logging

from aiohttp import ClientSession

from timingsclient.aio import FetchResponse, fetch
from timingsclient.config import PageContext
from timingsclient.constants import REPOSITORIES

log = logging.getLogger(__name__)


def get_repository(page: PageContext) -> str:
    return REPOSITORIES[page.environment]


def get_task_artifact_url(root_url: str, task_id: str, filename: str) -> str:
    return f"{root_url.rstrip('/')}/api/queue/v1/task/{task_id}/runs/0/artifacts/public/{filename}"


def get_index_artifact_url(root_url: str, repository: str, harness: str, filename: str) -> str:
    """Return the url of ``filename`` from the latest ``harness`` timings task of ``repository``."""
    namespace = f"gecko.v2.{repository}.latest.source.test-info-{harness}-timings"
    return f"{root_url.rstrip('/')}/api/index/v1/task/{namespace}/artifacts/public/{filename}"


async def fetch_task_artifact(session: ClientSession, task_id: str, filename: str, config) -> FetchResponse:
    """Fetch ``public/<filename>`` from run 0 of ``task_id``."""
    url = get_task_artifact_url(config["taskcluster_root_url"], task_id, filename)
    log.info(f"Fetching artifact: {url}")
    return await fetch(session, url, timeout=config.get("request_timeout"))


async def fetch_from_ci(session: ClientSession, harness: str, filename: str, page: PageContext, config) -> FetchResponse:
    """Fetch ``filename`` from the latest ``harness`` timings task in the index."""
    url = get_index_artifact_url(config["taskcluster_root_url"], get_repository(page), harness, filename)
    return await fetch(session, url, timeout=config.get("request_timeout"))
