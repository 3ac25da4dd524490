from __future__ import annotations

from types import SimpleNamespace

import pytest


@pytest.fixture
def settings(tmp_path):
    """Testing settings with a throw-away JSON store and no artificial latency."""
    return SimpleNamespace(
        SECRET_KEY="test-secret",
        DEBUG=False,
        TESTING=True,
        LOG_LEVEL="WARNING",
        STORE_BACKEND="json",
        STORE_PATH=str(tmp_path / "store.json"),
        STORE_SLOT="factory_logs",
        STORE_LATENCY={"fetch": 0.0, "upsert": 0.0, "remove": 0.0},
        DB_CONFIG={},
        AUTO_INIT_DB=False,
        OPERATORS_FILE="",
        PRODUCTS_FILE="",
        ADVANCE_VALIDATION="new_only",
        SAVED_INDICATOR_SECONDS=2.0,
    )
