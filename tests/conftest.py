import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("BLOBSIGNER_DEFAULT_EXPIRY_SECONDS", "BLOBSIGNER_SECRET_KEY", "AWS_DEFAULT_REGION"):
        monkeypatch.delenv(var, raising=False)
