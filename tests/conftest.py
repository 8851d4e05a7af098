import pytest

import roster
from overlay_config import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(
        api_key="RGAPI-test",
        platform="KR",
        routing="ASIA",
        queue_type="RANKED_SOLO_5x5",
        locale="ko",
        request_delay_s=0,
        db_path=str(tmp_path / "overlay.db"),
        players=[],
    )

@pytest.fixture
def conn():
    c = roster.connect(":memory:")
    yield c
    c.close()
