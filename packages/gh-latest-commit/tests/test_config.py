import pytest

from gh_latest_commit.config import Settings, load_settings
from gh_latest_commit.errors import ConfigurationError

ENV_VARS = (
    "INPUT_GH_USERNAME",
    "GH_USERNAME",
    "GITHUB_API_URL",
    "GITHUB_SERVER_URL",
    "LATEST_COMMIT_DOCUMENT",
    "LATEST_COMMIT_PREVIEW",
    "LATEST_COMMIT_PREVIEW_FALLBACK",
    "LATEST_COMMIT_PUSH",
    "LATEST_COMMIT_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_action_input_wins_over_plain_variable(monkeypatch):
    monkeypatch.setenv("INPUT_GH_USERNAME", "action-user")
    monkeypatch.setenv("GH_USERNAME", "plain")
    assert Settings().username == "action-user"


def test_plain_username_variable(monkeypatch):
    monkeypatch.setenv("GH_USERNAME", "octo")
    assert Settings().username == "octo"


def test_prefixed_variables_and_host(monkeypatch):
    monkeypatch.setenv("LATEST_COMMIT_DOCUMENT", "docs/profile.md")
    monkeypatch.setenv("LATEST_COMMIT_PREVIEW", "true")
    monkeypatch.setenv("LATEST_COMMIT_PUSH", "0")
    monkeypatch.setenv("GITHUB_SERVER_URL", "https://ghe.example.com/")
    settings = Settings()
    assert settings.document == "docs/profile.md"
    assert settings.preview is True
    assert settings.preview_fallback is False
    assert settings.push is False
    assert settings.host == "ghe.example.com"


def test_defaults_without_environment():
    settings = Settings()
    assert settings.username == ""
    assert settings.document == "README.md"
    assert settings.api_url == "https://api.github.com"
    assert settings.per_page == 100
    assert settings.push is True


def test_overrides_beat_environment_and_none_is_ignored(monkeypatch):
    monkeypatch.setenv("GH_USERNAME", "from-env")
    monkeypatch.setenv("LATEST_COMMIT_DOCUMENT", "ENV.md")
    settings = load_settings(username="from-cli", document=None)
    assert settings.username == "from-cli"
    assert settings.document == "ENV.md"


def test_invalid_timeout_is_a_configuration_error(monkeypatch):
    monkeypatch.setenv("LATEST_COMMIT_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError):
        load_settings()


def test_require_username_rejects_blank():
    with pytest.raises(ConfigurationError):
        Settings(username="   ").require_username()
    assert Settings(username=" octo ").require_username() == "octo"
