import pytest

_ENV_VARS = (
    "BED_EDITOR", "EDITOR", "BED_PROGRESS", "BED_CONFIRM",
    "BED_LOG_FILE", "BED_ENCODING",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path_factory):
    """Isolate tests from the developer's editor and config files."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
