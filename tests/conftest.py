import pytest

from cssmicro.config import reset_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("CSSMICRO_CONFIG_FILE", raising=False)
    monkeypatch.delenv("CSSMICRO_MAX_INTEGER_LITERAL_LENGTH", raising=False)
    reset_settings()
    yield
    reset_settings()
