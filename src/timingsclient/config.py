#!/usr/bin/env python
"""Config for timingsclient.

The dashboard page used to read its query string, host name and scheme
ad hoc. Here they're resolved once into a ``PageContext`` and passed to
``fetch_data`` explicitly.

Attributes:
    log (logging.Logger): the log object for the module.

"""
import json
import logging
from dataclasses import dataclass
from typing import Optional

import yaml
from immutabledict import immutabledict
from yarl import URL

from timingsclient.constants import DEFAULT_CONFIG, DEFAULT_ENVIRONMENT, HARNESSES, PUBLIC_DEMO_ENVIRONMENT
from timingsclient.exceptions import ConfigError

log = logging.getLogger(__name__)


# load_json_or_yaml {{{1
def load_json_or_yaml(string, is_path=False, file_type="json", exception=ConfigError, message="Failed to load %(file_type)s: %(exc)s"):
    """Load json or yaml from a filehandle or string, and raise a custom exception on failure.

    Args:
        string (str): json/yaml body or a path to open
        is_path (bool, optional): if ``string`` is a path. Defaults to False.
        file_type (str, optional): either "json" or "yaml". Defaults to "json".
        exception (exception, optional): the exception to raise on failure.
            If None, don't raise an exception.  Defaults to ConfigError.
        message (str, optional): the message to use for the exception.
            Defaults to "Failed to load %(file_type)s: %(exc)s"

    Returns:
        dict: the data from the string.

    Raises:
        Exception: as specified, on failure

    """
    if file_type == "json":
        _load_fh = json.load
        _load_str = json.loads
    else:
        _load_fh = yaml.safe_load
        _load_str = yaml.safe_load

    try:
        if is_path:
            with open(string, "r") as fh:
                contents = _load_fh(fh)
        else:
            contents = _load_str(string)
        return contents
    except (OSError, ValueError, yaml.YAMLError) as exc:
        if exception is not None:
            repl_dict = {"exc": str(exc), "file_type": file_type}
            raise exception(message % repl_dict) from exc


# init_config {{{1
def _validate_config(config):
    if "..." in config.values():
        raise ConfigError("Uninitialized value in config!")
    for key in ("treeherder_url", "taskcluster_root_url", "page_url"):
        if not config.get(key):
            raise ConfigError(f"Missing required config value {key}!")
    timeout = config.get("request_timeout")
    if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
        raise ConfigError(f"request_timeout must be a positive number, not {timeout!r}!")


def init_config(config_path=None, overrides=None, default_config=DEFAULT_CONFIG):
    """Build the running config.

    Values come from ``default_config``, then the yaml file at
    ``config_path``, then ``overrides``. ``None`` overrides are ignored so
    unset command line options don't clobber the file.

    Args:
        config_path (str, optional): the path to a yaml (or json) config file.
        overrides (dict, optional): values that take precedence over the file.
        default_config (dict, optional): the defaults. Defaults to ``DEFAULT_CONFIG``.

    Raises:
        ConfigError: if the resulting config is invalid.

    Returns:
        immutabledict: the config.

    """
    config = dict(default_config)
    if config_path is not None:
        contents = load_json_or_yaml(config_path, is_path=True, file_type="yaml", message=f"Can't read config from {config_path}!\n%(exc)s")
        if contents is not None and not isinstance(contents, dict):
            raise ConfigError(f"Config file {config_path} doesn't contain a mapping!")
        config.update(contents or {})
    for key, value in (overrides or {}).items():
        if value is not None:
            config[key] = value
    _validate_config(config)
    return immutabledict(config)


# PageContext {{{1
@dataclass(frozen=True)
class PageContext:
    """Everything the fetch logic needs to know about the dashboard page.

    Attributes:
        remote (bool): fetch from CI when ``True``, from ``./data/`` otherwise.
        environment (str): ``"public-demo"`` or ``"default"``; picks the
            upstream repository for index lookups.
        kind (str): the ``kind`` query parameter, if any.
        base_url (str): the page url, used to resolve ``./data/``.
        data_dir (str): read local data from this directory instead of
            ``base_url`` when set.

    """

    remote: bool
    environment: str = DEFAULT_ENVIRONMENT
    kind: Optional[str] = None
    base_url: str = DEFAULT_CONFIG["page_url"]
    data_dir: Optional[str] = None

    def __post_init__(self):
        if self.environment not in (PUBLIC_DEMO_ENVIRONMENT, DEFAULT_ENVIRONMENT):
            raise ConfigError(f"Unknown page environment {self.environment}!")


def get_page_context(config, page_url=None, kind=None):
    """Resolve the ``PageContext`` for a dashboard page url.

    Args:
        config (dict): the running config.
        page_url (str, optional): the page url. Defaults to ``config["page_url"]``.
        kind (str, optional): overrides the ``kind`` query parameter.

    Raises:
        ConfigError: if ``kind`` isn't a known harness.

    Returns:
        PageContext: the resolved page context.

    """
    url = URL(page_url or config["page_url"])
    kind = kind or url.query.get("kind") or None
    if kind is not None and kind not in HARNESSES:
        raise ConfigError(f"Unknown kind {kind}; expected one of {', '.join(HARNESSES)}")
    environment = PUBLIC_DEMO_ENVIRONMENT if url.host == config["public_demo_host"] else DEFAULT_ENVIRONMENT
    page = PageContext(
        remote=url.scheme == "https",
        environment=environment,
        kind=kind,
        base_url=str(url),
        data_dir=config.get("data_dir"),
    )
    log.debug("Resolved page context %s", page)
    return page
