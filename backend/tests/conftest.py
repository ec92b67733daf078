"""
测试公共夹具
"""
import pytest
from fastapi.testclient import TestClient

from main import create_app
from packverify.config import BACKEND_DIR, Settings
from packverify.core.lexicon_catalog import LexiconCatalog
from packverify.services.session_store import InMemorySessionStore

SAMPLE_TEXT = (
    "This miracle cream can cure acne, treat redness, and heal scars fast. "
    "It claims to be FDA approved for disease treatment."
)


def make_entry(rule_id, pattern, **overrides):
    entry = {
        "id": rule_id,
        "pattern": pattern,
        "patternType": "keyword",
        "domain": "general",
        "market": "general",
        "severity": "P1",
        "reason": f"reason for {rule_id}",
        "suggestion": f"suggestion for {rule_id}",
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def cure_catalog():
    """只含一条 cosmetics 的 P0 规则"""
    return LexiconCatalog.from_entries([
        make_entry("cos-cure", "cure", domain="cosmetics", severity="P0"),
    ])


@pytest.fixture
def bundled_catalog():
    return LexiconCatalog.from_file(BACKEND_DIR / "data" / "lexicon.json")


@pytest.fixture
def client(bundled_catalog, tmp_path):
    config = Settings(sessions_dir=tmp_path / "sessions", default_model_id="test-model")
    app = create_app(config, catalog=bundled_catalog, session_store=InMemorySessionStore())
    return TestClient(app)
