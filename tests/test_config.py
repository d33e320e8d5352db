# ==============================================
# Tests for AppConfig / get_config
# ==============================================

from pathlib import Path

from aden.config import AppConfig, get_config


class TestGetConfig:
    def test_defaults(self, clean_env):
        config = get_config()
        assert config.log_level == "INFO"
        assert config.profile is None
        assert config.project_dir == "."

    def test_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("ADEN_LOG_LEVEL", "debug")
        monkeypatch.setenv("ADEN_PROFILE", "retail")
        monkeypatch.setenv("ADEN_PROJECT_DIR", "/srv/app")
        config = get_config()
        assert config.log_level == "DEBUG"
        assert config.profile == "retail"
        assert config.config_paths()[1] == Path("/srv/app") / "aden-config.json"

    def test_env_file(self, clean_env, monkeypatch):
        # register the variable so monkeypatch removes what load_dotenv sets
        monkeypatch.setenv("ADEN_PROFILE", "")
        monkeypatch.delenv("ADEN_PROFILE")
        env_file = clean_env / "custom.env"
        env_file.write_text("ADEN_PROFILE=healthcare\n", encoding="utf-8")
        assert get_config(env_file).profile == "healthcare"

    def test_environment_beats_env_file(self, clean_env, monkeypatch):
        monkeypatch.setenv("ADEN_PROFILE", "financial")
        (clean_env / ".env").write_text("ADEN_PROFILE=healthcare\n", encoding="utf-8")
        assert get_config().profile == "financial"


class TestConfigPaths:
    def test_user_then_project(self, tmp_path):
        config = AppConfig(user_config_path=str(tmp_path / "user.json"), project_dir=str(tmp_path / "proj"))
        assert config.config_paths() == [tmp_path / "user.json", tmp_path / "proj" / "aden-config.json"]

    def test_project_dir_override(self, tmp_path):
        config = AppConfig(user_config_path=str(tmp_path / "user.json"))
        assert config.config_paths(str(tmp_path))[1] == tmp_path / "aden-config.json"
