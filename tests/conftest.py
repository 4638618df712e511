import pytest

from lirs.interpreter import Session

# Every test gets a Session built from defaults only. Settings exported in the
# developer's shell must not leak a prelude or a different expansion bound
# into the suite.


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    monkeypatch.delenv("LIRS_PRELUDE_PATH", raising=False)
    monkeypatch.delenv("LIRS_MAX_EXPANSION_DEPTH", raising=False)
    monkeypatch.setenv("LIRS_HISTORY_FILE", str(tmp_path / "history.json"))


@pytest.fixture
def session():
    """Fresh session with the chemistry macros and no prelude."""
    return Session(prelude=None)
