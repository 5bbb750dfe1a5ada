"""Resolve dashboard data filenames into responses.

``fetch_data`` is the only entry point the dashboard needs. On a remote
(https) page, files come from Firefox CI: try revision files through the
Treeherder job listing, everything else through the Taskcluster index.
On a local page, files come from ``./data/``. Missing xpcshell try data
falls back to the mochitest data of the same run.

"""
import asyncio
import logging
import os

from aiohttp import ClientError, ClientSession
from yarl import URL

from timingsclient.aio import FetchResponse, fetch, fetch_local
from timingsclient.artifacts import fetch_from_ci, fetch_task_artifact
from timingsclient.config import PageContext
from timingsclient.constants import LEGACY_TRY_PREFIX
from timingsclient.exceptions import NotFoundError, TimingsClientError
from timingsclient.harness import parse_try_filename, select_harness, to_mochitest_filename
from timingsclient.treeherder import locate_timings_jobs

log = logging.getLogger(__name__)


async def fetch_data(session: ClientSession, filename: str, page: PageContext, config) -> FetchResponse:
    """Fetch the dashboard data file ``filename``.

    Args:
        session (ClientSession): the session to use.
        filename (str): the data file, e.g. ``index.json`` or
            ``xpcshell-try-<revision>.json``.
        page (PageContext): the dashboard page we're fetching for.
        config (dict): the running config.

    Returns:
        FetchResponse: the response; check ``ok`` before reading the body.

    """
    if page.remote:
        try_request = parse_try_filename(filename)
        if try_request is not None:
            harness, revision = try_request
            return await _fetch_try_revision(session, filename, harness, revision, config)
        return await _fetch_latest(session, filename, page, config)
    return await _fetch_local_with_fallback(session, filename, page, config)


async def _fetch_try_revision(session, filename, harness, revision, config):
    log.info(f"Detected try revision request: {harness} for {revision}")
    try:
        timings_jobs = await locate_timings_jobs(session, revision, config)

        if timings_jobs[harness]:
            response = await fetch_task_artifact(session, timings_jobs[harness], filename, config)
            if response.ok:
                return response

        if harness == "xpcshell" and timings_jobs["mochitest"]:
            log.info(f"xpcshell data not found for {filename}, trying mochitest artifact")
            return await fetch_task_artifact(session, timings_jobs["mochitest"], to_mochitest_filename(filename), config)

        raise NotFoundError(f"No {harness}-timings job found for revision {revision}")
    except (TimingsClientError, ClientError, asyncio.TimeoutError) as exc:
        log.error(f"Error fetching try revision artifact: {exc}")
        return FetchResponse.not_found(str(exc))


async def _fetch_latest(session, filename, page, config):
    harness = select_harness(filename, page.kind)
    response = await fetch_from_ci(session, harness, filename, page, config)
    if response.ok:
        return response

    # Try filenames without a full revision still fall back to mochitest.
    if filename.startswith(LEGACY_TRY_PREFIX):
        mochitest_filename = to_mochitest_filename(filename)
        log.info(f"xpcshell data not found for {filename}, trying {mochitest_filename}...")
        return await fetch_from_ci(session, "mochitest", mochitest_filename, page, config)

    return response


async def _fetch_local(session, filename, page, config):
    if page.data_dir:
        return await fetch_local(os.path.join(page.data_dir, filename))
    url = URL(page.base_url).join(URL(f"data/{filename}"))
    return await fetch(session, str(url), timeout=config.get("request_timeout"))


async def _fetch_local_with_fallback(session, filename, page, config):
    try:
        response = await _fetch_local(session, filename, page, config)
        if response.ok:
            return response
    except (ClientError, OSError) as exc:
        log.info(f"Failed to fetch {filename}: {exc}")

    if filename.startswith(LEGACY_TRY_PREFIX):
        mochitest_filename = to_mochitest_filename(filename)
        log.info(f"Trying {mochitest_filename}...")
        return await _fetch_local(session, mochitest_filename, page, config)

    # Fetch again so the caller gets the real failure.
    return await _fetch_local(session, filename, page, config)
