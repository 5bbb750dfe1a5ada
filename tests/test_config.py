import pytest

from timingsclient import config as tc_config
from timingsclient.constants import DEFAULT_CONFIG
from timingsclient.exceptions import ConfigError


@pytest.mark.parametrize(
    "string,file_type,expected",
    (
        pytest.param('{"a": 1}', "json", {"a": 1}, id="json"),
        pytest.param("a: 1\nb: [2]\n", "yaml", {"a": 1, "b": [2]}, id="yaml"),
    ),
)
def test_load_json_or_yaml(string, file_type, expected):
    assert tc_config.load_json_or_yaml(string, file_type=file_type) == expected


def test_load_json_or_yaml_failure():
    with pytest.raises(ConfigError):
        tc_config.load_json_or_yaml("{not json", file_type="json")
    assert tc_config.load_json_or_yaml("{not json", file_type="json", exception=None) is None


def test_init_config_defaults():
    config = tc_config.init_config()
    assert dict(config) == dict(DEFAULT_CONFIG)
    with pytest.raises(TypeError):
        config["verbose"] = True


def test_init_config_file_and_overrides(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("treeherder_url: https://th.example\nverbose: true\nrequest_timeout: 30\n")
    config = tc_config.init_config(config_path=str(path), overrides={"verbose": None, "data_dir": "/data"})
    assert config["treeherder_url"] == "https://th.example"
    assert config["verbose"] is True
    assert config["request_timeout"] == 30
    assert config["data_dir"] == "/data"


@pytest.mark.parametrize(
    "contents,overrides",
    (
        pytest.param("treeherder_url: '...'\n", {}, id="uninitialized"),
        pytest.param("- a\n- b\n", {}, id="not_a_mapping"),
        pytest.param("request_timeout: -1\n", {}, id="negative_timeout"),
        pytest.param("", {"page_url": ""}, id="empty_page_url"),
        pytest.param("foo: [\n", {}, id="bad_yaml"),
    ),
)
def test_init_config_invalid(tmp_path, contents, overrides):
    path = tmp_path / "config.yaml"
    path.write_text(contents)
    with pytest.raises(ConfigError):
        tc_config.init_config(config_path=str(path), overrides=overrides)


def test_init_config_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Can't read config"):
        tc_config.init_config(config_path=str(tmp_path / "missing.yaml"))


@pytest.mark.parametrize(
    "page_url,kind,expected",
    (
        pytest.param(
            "https://fqueze.github.io/timings/?kind=mochitest",
            None,
            tc_config.PageContext(remote=True, environment="public-demo", kind="mochitest", base_url="https://fqueze.github.io/timings/?kind=mochitest"),
            id="public_demo",
        ),
        pytest.param(
            "https://example.com/",
            None,
            tc_config.PageContext(remote=True, environment="default", kind=None, base_url="https://example.com/"),
            id="default",
        ),
        pytest.param(
            "http://localhost:8000/?kind=",
            None,
            tc_config.PageContext(remote=False, environment="default", kind=None, base_url="http://localhost:8000/?kind="),
            id="local_empty_kind",
        ),
        pytest.param(
            "http://fqueze.github.io/",
            "mochitest",
            tc_config.PageContext(remote=False, environment="public-demo", kind="mochitest", base_url="http://fqueze.github.io/"),
            id="kind_override",
        ),
    ),
)
def test_get_page_context(page_url, kind, expected):
    config = tc_config.init_config()
    assert tc_config.get_page_context(config, page_url=page_url, kind=kind) == expected


def test_get_page_context_from_config():
    config = tc_config.init_config(overrides={"page_url": "http://localhost/", "data_dir": "/data"})
    page = tc_config.get_page_context(config)
    assert not page.remote
    assert page.data_dir == "/data"


def test_get_page_context_bad_kind():
    with pytest.raises(ConfigError, match="Unknown kind reftest"):
        tc_config.get_page_context(tc_config.init_config(), page_url="https://example.com/?kind=reftest")


def test_page_context_bad_environment():
    with pytest.raises(ConfigError):
        tc_config.PageContext(remote=True, environment="staging")
