import pytest

from gitrelease.config.loader import API_URL_VAR, TIMEOUT_VAR, TOKEN_VAR


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Hide the host's gitrelease configuration from the tests.

    Tests that need a token or an API URL set them explicitly with
    ``unittest.mock.patch.dict(os.environ, ...)``.
    """
    for name in (TOKEN_VAR, API_URL_VAR, TIMEOUT_VAR):
        monkeypatch.delenv(name, raising=False)
    yield
