from pathlib import Path

import pytest

from docylit.config import (
    DEFAULT_MODEL,
    ConfigValidationError,
    DocylitConfig,
    find_docylit_config,
    load_docylit_config,
    save_docylit_config,
)


@pytest.fixture(autouse=True)
def clear_docylit_env(monkeypatch):
    for name in ("DOCYLIT_ASSIST__MODEL", "DOCYLIT_AUTOSAVE__DELAY_SECONDS", "DOCYLIT_STORAGE__DIRECTORY"):
        monkeypatch.delenv(name, raising=False)


def write_config(root: Path, body: str) -> Path:
    config_dir = root / ".docylit"
    config_dir.mkdir()
    path = config_dir / "docylit.toml"
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults_without_config_file(tmp_path):
    config = load_docylit_config(tmp_path)
    assert config.assist.model == DEFAULT_MODEL
    assert config.assist.temperature == 0.7
    assert config.assist.retry_attempts == 3
    assert config.autosave.delay_seconds == 1.0
    assert config.storage.directory == Path(".docylit/store")


def test_file_values_override_defaults(tmp_path):
    write_config(tmp_path, '[assist]\nmodel = "gemini-pro"\n\n[autosave]\ndelay_seconds = 0.25\n')
    config = load_docylit_config(tmp_path)
    assert config.assist.model == "gemini-pro"
    assert config.autosave.delay_seconds == 0.25
    assert config.assist.temperature == 0.7


def test_config_is_found_from_subdirectory(tmp_path):
    expected = write_config(tmp_path, "")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_docylit_config(nested) == expected.resolve()


def test_environment_beats_file(tmp_path, monkeypatch):
    write_config(tmp_path, '[assist]\nmodel = "from-file"\n')
    monkeypatch.setenv("DOCYLIT_ASSIST__MODEL", "from-env")
    assert load_docylit_config(tmp_path).assist.model == "from-env"


def test_environment_without_file(monkeypatch):
    monkeypatch.setenv("DOCYLIT_AUTOSAVE__DELAY_SECONDS", "2.5")
    assert DocylitConfig().autosave.delay_seconds == 2.5


def test_invalid_delay_is_rejected(tmp_path):
    write_config(tmp_path, "[autosave]\ndelay_seconds = 0\n")
    with pytest.raises(ConfigValidationError) as exc_info:
        load_docylit_config(tmp_path)
    assert exc_info.value.errors


def test_unknown_section_is_rejected(tmp_path):
    write_config(tmp_path, "[toolbar]\nicons = true\n")
    with pytest.raises(ConfigValidationError):
        load_docylit_config(tmp_path)


def test_save_then_load(tmp_path):
    config = DocylitConfig()
    config.assist.model = "gemini-saved"
    config.autosave.delay_seconds = 0.5

    path = save_docylit_config(config, tmp_path)

    assert path == tmp_path / ".docylit" / "docylit.toml"
    assert "prompts_dir" not in path.read_text(encoding="utf-8")
    loaded = load_docylit_config(tmp_path)
    assert loaded.assist.model == "gemini-saved"
    assert loaded.autosave.delay_seconds == 0.5
