#!/usr/bin/env python
"""timingsclient constants.

Attributes:
    DEFAULT_CONFIG (immutabledict): the default config for timingsclient.
        Running configs are validated against this.
    HARNESSES (tuple): the test harnesses we know how to fetch timings for.
    ENVIRONMENTS (tuple): the page environments we resolve upstream repos for.
    TRY_REVISION_RE (re.Pattern): matches ``<harness>-try-<revision>.json``.
    TIMINGS_JOB_SUFFIXES (immutabledict): maps harness to the suffix of its
        timings job type name on Treeherder.
    STATUSES (dict): maps result name (string) to exit code (int).

"""
import os
import re

from immutabledict import immutabledict

HARNESSES = ("xpcshell", "mochitest")
DEFAULT_HARNESS = "xpcshell"

PUBLIC_DEMO_ENVIRONMENT = "public-demo"
DEFAULT_ENVIRONMENT = "default"
ENVIRONMENTS = (PUBLIC_DEMO_ENVIRONMENT, DEFAULT_ENVIRONMENT)

# Only the public demo page reads timings from try; everything else reads
# mozilla-central.
REPOSITORIES = immutabledict(
    {
        PUBLIC_DEMO_ENVIRONMENT: "try",
        DEFAULT_ENVIRONMENT: "mozilla-central",
    }
)

TRY_REVISION_RE = re.compile(r"(xpcshell|mochitest)-try-([a-f0-9]{40})\.json")
LEGACY_TRY_PREFIX = "xpcshell-try-"
GENERIC_FILENAME = "index.json"

TIMINGS_JOB_SUFFIXES = immutabledict(
    {
        "xpcshell": "xpcshell-timings-rev",
        "mochitest": "mochitest-timings-rev",
    }
)
COMPLETED_STATE = "completed"

DEFAULT_CONFIG = immutabledict(
    {
        "treeherder_url": "https://treeherder.mozilla.org",
        "taskcluster_root_url": os.environ.get("TASKCLUSTER_ROOT_URL", "https://firefox-ci-tc.services.mozilla.com"),
        "public_demo_host": "fqueze.github.io",
        "page_url": "https://localhost/",
        "data_dir": None,
        "request_timeout": None,
        "verbose": False,
    }
)

STATUSES = {
    "success": 0,
    "failure": 1,
    "malformed-config": 3,
}
