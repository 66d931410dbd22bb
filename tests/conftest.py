"""Root test configuration: isolate every test from a config.yaml or HUNKDIFF_* env in the caller's shell"""

import pytest

from hunkdiff.config import ENV_PREFIX, Settings


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory with no HUNKDIFF_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in Settings.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{name.upper()}", raising=False)
