import aiohttp
import pytest
import pytest_asyncio
from aioresponses import aioresponses

from timingsclient.config import PageContext, init_config

TREEHERDER_URL = "https://treeherder.fake"
TASKCLUSTER_ROOT_URL = "https://tc.fake"
REVISION = "0123456789abcdef0123456789abcdef01234567"
PUSH_URL = f"{TREEHERDER_URL}/api/project/try/push/?full=true&count=10&revision={REVISION}"
PROPERTY_NAMES = ["id", "job_type_name", "state", "result", "task_id"]


def jobs_url(push_id, page=None):
    url = f"{TREEHERDER_URL}/api/jobs/?push_id={push_id}"
    if page is not None:
        url = f"{url}&page={page}"
    return url


def job_row(job_type_name, task_id, state="completed", job_id=1):
    return [job_id, job_type_name, state, "success", task_id]


def task_artifact_url(task_id, filename):
    return f"{TASKCLUSTER_ROOT_URL}/api/queue/v1/task/{task_id}/runs/0/artifacts/public/{filename}"


def index_artifact_url(repository, harness, filename):
    return f"{TASKCLUSTER_ROOT_URL}/api/index/v1/task/gecko.v2.{repository}.latest.source.test-info-{harness}-timings/artifacts/public/{filename}"


@pytest.fixture
def responses():
    with aioresponses() as rsps:
        yield rsps


@pytest_asyncio.fixture
async def session():
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.fixture
def config():
    return init_config(
        overrides={
            "treeherder_url": TREEHERDER_URL,
            "taskcluster_root_url": TASKCLUSTER_ROOT_URL,
        }
    )


@pytest.fixture
def remote_page():
    return PageContext(remote=True)


@pytest.fixture
def local_page():
    return PageContext(remote=False, base_url="http://localhost:8000/")
