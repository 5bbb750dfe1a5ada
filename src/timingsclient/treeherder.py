"""Find timings jobs for try revisions through the Treeherder API."""
import asyncio
import logging
from typing import Any, Optional, Sequence

from aiohttp import ClientError, ClientSession
from immutabledict import immutabledict

from timingsclient.aio import fetch_json
from timingsclient.constants import COMPLETED_STATE, HARNESSES, TIMINGS_JOB_SUFFIXES
from timingsclient.exceptions import FetchError, NotFoundError

log = logging.getLogger(__name__)

TimingsJobs = dict[str, Optional[str]]


class JobProperties:
    """Map Treeherder job property names to row positions.

    The jobs endpoint returns each job as a list of values, with the names
    of those values sent once per page in ``job_property_names``.

    """

    def __init__(self, names: Sequence[str]):
        indices = {}
        for index, name in enumerate(names):
            indices.setdefault(name, index)
        self.indices = immutabledict(indices)

    def get(self, row: Sequence[Any], name: str) -> Any:
        """Return the ``name`` value of ``row``, or ``None`` if the listing doesn't have it."""
        index = self.indices.get(name)
        if index is None or not isinstance(row, (list, tuple)) or index >= len(row):
            return None
        return row[index]


async def get_push_id(session: ClientSession, treeherder_url: str, revision: str, timeout: Optional[float] = None) -> int:
    """Return the id of the try push for ``revision``.

    Raises:
        NotFoundError: if Treeherder doesn't know about a push for ``revision``,
            or its answer can't be read.

    """
    url = f"{treeherder_url}/api/project/try/push/?full=true&count=10&revision={revision}"
    message = f"No push found for revision {revision} on try"
    try:
        result = await fetch_json(session, url, timeout=timeout)
    except (ClientError, asyncio.TimeoutError, ValueError) as exc:
        raise NotFoundError(message) from exc
    if not isinstance(result, dict) or not isinstance(result.get("results"), list) or not result["results"]:
        raise NotFoundError(message)
    push = result["results"][0]
    if not isinstance(push, dict) or push.get("id") is None:
        raise NotFoundError(message)
    push_id = push["id"]
    log.info(f"Found push ID: {push_id}")
    return push_id


async def get_all_jobs(session: ClientSession, treeherder_url: str, push_id: int, timeout: Optional[float] = None) -> tuple[list, JobProperties]:
    """Return every job row of ``push_id``, following ``next`` links.

    Returns:
        tuple: the concatenated rows and the ``JobProperties`` of the
            first page.

    Raises:
        FetchError: if any page can't be fetched or read.

    """
    url = f"{treeherder_url}/api/jobs/?push_id={push_id}"
    message = f"Failed to fetch jobs for push ID {push_id}"
    jobs = []
    property_names = []
    while url:
        try:
            result = await fetch_json(session, url, timeout=timeout)
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise FetchError(message) from exc
        if not result or not isinstance(result, dict):
            raise FetchError(message)
        rows = result.get("results") or []
        if not isinstance(rows, list):
            raise FetchError(message)

        jobs.extend(rows)
        if not property_names:
            property_names = result.get("job_property_names") or []
        url = result.get("next")

    log.info(f"Found {len(jobs)} total jobs")
    return jobs, JobProperties(property_names)


def find_timings_jobs(jobs: Sequence[Sequence[Any]], properties: JobProperties) -> TimingsJobs:
    """Return the task id of the last completed timings job per harness."""
    timings_jobs = {harness: None for harness in HARNESSES}
    for job in jobs:
        job_name = properties.get(job, "job_type_name")
        task_id = properties.get(job, "task_id")
        state = properties.get(job, "state")

        if state != COMPLETED_STATE or not job_name or not task_id or not isinstance(job_name, str):
            continue

        for harness, suffix in TIMINGS_JOB_SUFFIXES.items():
            if job_name.endswith(suffix):
                timings_jobs[harness] = task_id
                break
    return timings_jobs


async def locate_timings_jobs(session: ClientSession, revision: str, config) -> TimingsJobs:
    """Find the xpcshell and mochitest timings tasks for a try ``revision``.

    Args:
        session (ClientSession): the session to use.
        revision (str): the 40 character try revision.
        config (dict): the running config.

    Returns:
        dict: maps each harness to its timings task id, or ``None``.

    Raises:
        NotFoundError: if there's no push for ``revision``.
        FetchError: if the job listing fails.

    """
    log.info(f"Finding timings jobs for try revision {revision}...")
    treeherder_url = config["treeherder_url"]
    timeout = config.get("request_timeout")

    push_id = await get_push_id(session, treeherder_url, revision, timeout=timeout)
    jobs, properties = await get_all_jobs(session, treeherder_url, push_id, timeout=timeout)
    timings_jobs = find_timings_jobs(jobs, properties)

    for harness, task_id in timings_jobs.items():
        if task_id:
            log.info(f"Found {harness}-timings job: {task_id}")
    return timings_jobs
