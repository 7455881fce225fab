import pytest

from bread.config import RunConfig


@pytest.fixture
def run_config(tmp_path):
    return RunConfig(
        api_key="test-key",
        translation="niv",
        bible_id="78a9f6124f344018-01",
        out_dir=tmp_path / "passages" / "niv",
        delay=0.5,
    )
