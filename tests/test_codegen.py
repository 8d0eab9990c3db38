"""Tests for Rust source rendering and file writing."""

import pytest

from sqlx_codegen.codegen import MOD_FILE_NAME, ModelRenderer, ModelWriter, normalize_output_path
from sqlx_codegen.database.models import Column, Driver, Table, TableContext
from sqlx_codegen.database.normalizer import normalize
from sqlx_codegen.errors import GenerationError


class TestRenderModel:
    """Test per-table rendering."""

    @pytest.fixture
    def users_source(self, sample_tables, sample_columns):
        model = normalize(sample_tables, sample_columns)
        return ModelRenderer(Driver.MYSQL).render_model(model.get_table_context("users"))

    def test_struct_and_fields(self, users_source):
        assert "pub struct Users {" in users_source
        assert "pub id: Option<i32>," in users_source
        assert "pub user_name: Option<String>," in users_source
        assert "pub r#type: Option<String>," in users_source
        assert "pub struct UsersReq {" in users_source

    def test_table_and_column_names(self, users_source):
        assert '"users".to_string()' in users_source
        assert '"id,user_name,r#type".to_string()' in users_source

    def test_comments(self, users_source):
        assert "/// registered users" in users_source
        assert "/// login" in users_source

    def test_length_validation_only_on_strings(self, users_source):
        assert "#[validate(length(max = 50))]" in users_source
        assert "#[validate(length(max = 20))]" in users_source
        assert users_source.count("#[validate(length") == 2

    def test_insert_and_update_statements(self, users_source):
        assert '"?,?,?"' in users_source
        assert '"id = ?,user_name = ?,r#type = ?"' in users_source
        assert users_source.count(".bind(&self.user_name)") == 2

    def test_string_columns_filter_with_like(self, users_source):
        assert "\"user_name\", user_name));" in users_source
        assert "like '%{}%'" in users_source

    def test_table_without_columns(self):
        context = TableContext.build(Table(name="audit_log"), [])
        source = ModelRenderer(Driver.SQLITE).render_model(context)

        assert "pub struct AuditLog {" in source
        assert "pub struct AuditLogReq {" in source
        assert "Option<>" not in source

    def test_render_failure(self):
        renderer = ModelRenderer(Driver.MYSQL)
        renderer._model_template = renderer._env.from_string("{{ undefined_value }}")
        context = TableContext.build(Table(name="users"), [Column(name="id", field_type="i32")])

        with pytest.raises(GenerationError) as exc_info:
            renderer.render_model(context)

        assert exc_info.value.details == {"table": "users"}


class TestRenderMod:
    """Test mod.rs rendering."""

    def test_module_declarations(self):
        source = ModelRenderer(Driver.MYSQL).render_mod(["users", "orders"])
        assert "mod users;" in source
        assert "pub use users::*;" in source
        assert "mod orders;" in source
        assert source.index("mod users;") < source.index("mod orders;")
        assert "pub struct PageRes<T>" in source

    @pytest.mark.parametrize("driver,pool_type,constructor", [
        (Driver.MYSQL, "MySql", "sqlx::mysql::MySqlPool"),
        (Driver.POSTGRES, "Postgres", "sqlx::postgres::PgPool"),
        (Driver.SQLITE, "Sqlite", "sqlx::sqlite::SqlitePool"),
    ])
    def test_pool_per_driver(self, driver, pool_type, constructor):
        source = ModelRenderer(driver).render_mod(["users"])
        assert f"Pool<{pool_type}>" in source
        assert constructor in source
        assert 'std::env::var("DATABASE_URL")' in source


class TestModelWriter:
    """Test output directory handling."""

    @pytest.mark.parametrize("path,expected", [
        ("target/models", "target/models/"),
        ("target/models/", "target/models/"),
        ("", ""),
    ])
    def test_normalize_output_path(self, path, expected):
        assert normalize_output_path(path) == expected

    def test_writer_path_gets_trailing_slash(self, tmp_path):
        writer = ModelWriter(str(tmp_path / "models"))
        assert writer.path.endswith("/")

    def test_creates_directory_and_writes(self, tmp_path):
        writer = ModelWriter(str(tmp_path / "nested" / "models"))
        target = writer.write(MOD_FILE_NAME, "mod users;\n")

        assert target == tmp_path / "nested" / "models" / "mod.rs"
        assert target.read_text(encoding="utf-8") == "mod users;\n"
        assert writer.written == [target]

    def test_overwrites_existing_file(self, tmp_path):
        writer = ModelWriter(str(tmp_path))
        writer.write("users.rs", "old")
        writer.write("users.rs", "new")
        assert (tmp_path / "users.rs").read_text(encoding="utf-8") == "new"

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        writer = ModelWriter(str(blocker / "models"))

        with pytest.raises(GenerationError) as exc_info:
            writer.write("users.rs", "content")

        assert exc_info.value.details["path"].endswith("users.rs")
        assert writer.written == []
