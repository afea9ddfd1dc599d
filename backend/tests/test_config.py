"""Tests for codecontext.config"""

from codecontext.config import DEFAULT_CONFIG, expand_pattern, load_config


def test_defaults(monkeypatch):
    for var in (
        "CODECONTEXT_EMBEDDING_BACKEND",
        "GEMINI_API_KEY",
        "CODECONTEXT_EMBED_TIMEOUT",
        "CODECONTEXT_MAX_WORKERS",
        "CODECONTEXT_CLAIM_UNASSIGNED_FILES",
    ):
        monkeypatch.delenv(var, raising=False)

    cfg = load_config()

    assert cfg["embedding"]["backend"] == "gemini"
    assert "api_key" not in cfg["embedding"]
    assert cfg["embedding"]["timeout_seconds"] == 10.0
    assert cfg["indexing"]["max_workers"] == 4
    assert cfg["context"]["claim_unassigned_files"] is True
    assert cfg["context"]["preview_char_budget"] == 2000
    assert "**/node_modules/**" in cfg["exclude_globs"]


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CODECONTEXT_EMBEDDING_BACKEND", "sentence_transformers")
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.setenv("CODECONTEXT_EMBED_TIMEOUT", "2.5")
    monkeypatch.setenv("CODECONTEXT_MAX_WORKERS", "1")
    monkeypatch.setenv("CODECONTEXT_CLAIM_UNASSIGNED_FILES", "off")
    monkeypatch.setenv("DATABASE_URL", "postgresql://db/cc")

    cfg = load_config()

    assert cfg["embedding"]["backend"] == "sentence_transformers"
    assert cfg["embedding"]["api_key"] == "k"
    assert cfg["embedding"]["timeout_seconds"] == 2.5
    assert cfg["indexing"]["max_workers"] == 1
    assert cfg["context"]["claim_unassigned_files"] is False
    assert cfg["database"]["url"] == "postgresql://db/cc"


def test_load_config_returns_independent_copies():
    cfg = load_config()
    cfg["context"]["main_file_markers"].append("server")

    assert DEFAULT_CONFIG["context"]["main_file_markers"] == ["index", "main", "app"]
    assert load_config()["context"]["main_file_markers"] == ["index", "main", "app"]


def test_expand_pattern():
    assert expand_pattern("*.log") == ["*.log", "**/*.log"]
    assert expand_pattern("dist/**") == ["dist/**", "**/dist/**"]
    assert expand_pattern("**/x") == ["**/x"]
    assert expand_pattern("  ") == []
    assert expand_pattern("# comment") == []
