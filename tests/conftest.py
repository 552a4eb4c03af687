import pytest

# Tests must not pick up configuration from the developer's shell. The sexplug
# environment variables are unset for the whole session; tests that exercise
# configuration set them with monkeypatch, which restores them afterwards.


@pytest.fixture(autouse=True, scope="session")
def _clean_sexplug_env():
    with pytest.MonkeyPatch.context() as mp:
        for var in ("SEXPLUG_EMPTY_PEGS", "SEXPLUG_LOG_LEVEL"):
            mp.delenv(var, raising=False)
        yield
