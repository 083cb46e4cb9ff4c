from correction_editor.config import APP_KEY_ENV, EditorConfig, load_config
from correction_editor.ir import ALL_RESPONSE_TYPES


def test_defaults():
    config = EditorConfig()
    assert config.persist
    assert not config.ignore_no_replacement
    assert config.response_type == ALL_RESPONSE_TYPES


def test_load_yaml(tmp_path):
    path = tmp_path / "editor.yml"
    path.write_text(
        "editor:\n"
        "  app_key: abc123\n"
        "  persist: false\n"
        "  ignore_no_replacement: true\n"
        "  response_type: rulesApplied\n"
        "  options:\n"
        "    protected: [\"Perfect Tense\"]\n",
        encoding="utf-8",
    )
    config = load_config(str(path))
    assert config.app_key == "abc123"
    assert not config.persist
    assert config.ignore_no_replacement
    assert config.response_type == ("rulesApplied",)
    assert config.options == {"protected": ["Perfect Tense"]}


def test_empty_file_and_env_key(tmp_path, monkeypatch):
    monkeypatch.setenv(APP_KEY_ENV, "from-env")
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    config = load_config(str(path))
    assert config.app_key == "from-env"
    assert config.persist_workers == 2


def test_job_request_passes_settings_through():
    config = EditorConfig(app_key="abc123", options={"protected": ["Perfect Tense"]}, response_type=("rulesApplied",))
    assert config.job_request("Ths is fine.") == {
        "text": "Ths is fine.",
        "responseType": ["rulesApplied"],
        "options": {"protected": ["Perfect Tense"]},
    }

    request = config.job_request("Ths is fine.", options={"dialect": "en-GB"}, response_type=ALL_RESPONSE_TYPES)
    assert request["responseType"] == list(ALL_RESPONSE_TYPES)
    assert request["options"] == {"protected": ["Perfect Tense"], "dialect": "en-GB"}
    assert config.options == {"protected": ["Perfect Tense"]}
