"""Tests for settings loading."""

from sqlx_codegen.config import Settings


class TestSettings:
    """Test defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        for name in ("OUTPUT_PATH", "LOG_LEVEL", "DEFAULT_HOST", "MYSQL_PORT", "POSTGRES_PORT", "CONNECT_TIMEOUT"):
            monkeypatch.delenv(f"SQLX_CODEGEN_{name}", raising=False)

        settings = Settings(_env_file=None)
        assert settings.output_path == "target/models/"
        assert settings.log_level == "WARNING"
        assert settings.default_host == "localhost"
        assert settings.mysql_port == 3306
        assert settings.postgres_port == 5432
        assert settings.connect_timeout == 10

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SQLX_CODEGEN_OUTPUT_PATH", "src/models")
        monkeypatch.setenv("SQLX_CODEGEN_MYSQL_PORT", "3307")

        settings = Settings(_env_file=None)
        assert settings.output_path == "src/models"
        assert settings.mysql_port == 3307

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SQLX_CODEGEN_CONNECT_TIMEOUT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("SQLX_CODEGEN_CONNECT_TIMEOUT=3\nUNRELATED=1\n")

        settings = Settings(_env_file=str(env_file))
        assert settings.connect_timeout == 3
