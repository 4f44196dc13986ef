"""Tests for the dialect generators."""

from pathlib import Path

import pytest

from pgentity_cli.database.models import Column, Table
from pgentity_cli.dialects import (
    SQLAlchemyGenerator,
    TypeORMGenerator,
    available_dialects,
    get_dialect,
    write_artifacts,
)
from pgentity_cli.dialects.base import GeneratedArtifact
from pgentity_cli.errors import OutputWriteError, UnknownDialectError, UnmappedTypeError


USER_ACCOUNT_MODEL = '''

class UserAccount(Base):
    __tablename__ = 'user_account'
    __table_args__ = {"schema": 'public'}

    id = sa.Column('id', sa.Integer, primary_key=True, server_default=sa.text("nextval('user_account_id_seq'::regclass)"))
    email = sa.Column('email', sa.String, nullable=True)
    tags = sa.Column('tags', sa.ARRAY(sa.Text), nullable=False)
'''

USER_ACCOUNT_ENTITY = '''import { Column, Entity, PrimaryColumn } from "typeorm";

@Entity({ name: "user_account", schema: "public" })
export class UserAccount {
    @PrimaryColumn({ name: "id" })
    id: number;

    @Column({ name: "email", nullable: true })
    email?: string;

    @Column({ name: "tags", array: true })
    tags: string[];
}
'''


class TestDialectRegistry:
    """Test resolving dialect names."""

    def test_available_dialects(self):
        """Test registered dialect names are listed sorted."""
        assert available_dialects() == ["py-sqlalchemy", "ts-typeorm"]

    def test_get_known_dialects(self):
        """Test each name resolves to its generator class."""
        assert isinstance(get_dialect("py-sqlalchemy"), SQLAlchemyGenerator)
        assert isinstance(get_dialect("ts-typeorm"), TypeORMGenerator)

    def test_each_dialect_owns_its_type_mapper(self):
        """Test each generator exposes its own type mapper."""
        assert get_dialect("py-sqlalchemy").type_mapper.map_scalar("text") == "sa.Text"
        assert get_dialect("ts-typeorm").type_mapper.map_scalar("text") == "string"

    def test_unknown_dialect(self):
        """Test an unknown name raises with the available choices."""
        with pytest.raises(UnknownDialectError) as exc_info:
            get_dialect("django")

        assert exc_info.value.dialect == "django"
        assert "py-sqlalchemy" in exc_info.value.message


class TestSQLAlchemyGenerator:
    """Test the strict, combined-file dialect."""

    def test_context_segregates_primary_keys(self, user_account_table):
        """Test the SQLAlchemy context keeps primary keys apart."""
        context = SQLAlchemyGenerator().build_context(user_account_table)

        assert context["table_name"] == "user_account"
        assert context["table_name_camel_cased"] == "UserAccount"
        assert context["schema"] == "public"
        assert [c.name for c in context["pk_columns"]] == ["id"]
        assert [c.name for c in context["columns"]] == ["email", "tags"]

    def test_context_types(self, user_account_table):
        """Test SQLAlchemy target types, arrays included."""
        context = SQLAlchemyGenerator().build_context(user_account_table)
        types = {c.name: c.target_type for c in context["pk_columns"] + context["columns"]}

        assert types == {
            "id": "sa.Integer",
            "email": "sa.String",
            "tags": "sa.ARRAY(sa.Text)",
        }

    def test_box_column_is_mapped(self):
        """Test a box column maps to the header-declared type."""
        table = Table(name="shapes", schema="public", columns=(Column("area", "box"),))

        context = SQLAlchemyGenerator().build_context(table)

        assert context["columns"][0].target_type == "_PgBox"

    def test_unmapped_type_is_fatal(self, hstore_table):
        """Test an unknown type aborts SQLAlchemy generation."""
        with pytest.raises(UnmappedTypeError) as exc_info:
            SQLAlchemyGenerator().generate([hstore_table], "models.py")

        error = exc_info.value
        assert error.raw_type == "hstore"
        assert error.table == "settings"
        assert error.column == "attrs"
        assert "hstore" in error.message

    def test_renders_entity(self, user_account_table):
        """Test the rendered SQLAlchemy model text."""
        assert SQLAlchemyGenerator().render_entity(user_account_table) == USER_ACCOUNT_MODEL

    def test_generates_single_combined_artifact(self, user_account_table, tmp_path):
        """Test all models go into one file after the header."""
        orders = Table(
            name="orders",
            schema="public",
            columns=(Column("order_id", "bigint", is_primary_key=True),),
        )
        out = tmp_path / "models.py"

        artifacts = SQLAlchemyGenerator().generate([orders, user_account_table], out)

        assert len(artifacts) == 1
        artifact = artifacts[0]
        assert artifact.path == out
        assert artifact.tables == ["orders", "user_account"]
        assert artifact.content.startswith("import ast\n")
        assert "Base = declarative_base()" in artifact.content
        assert '_PgBox = _make_geometry_type("box")' in artifact.content
        assert artifact.content.index("class Orders(Base):") < artifact.content.index("class UserAccount(Base):")
        assert artifact.content.endswith(USER_ACCOUNT_MODEL)

    def test_keyword_column_gets_safe_attribute(self):
        """Test a keyword column name gets a safe attribute name."""
        table = Table(name="t", schema="public", columns=(Column("class", "text", is_nullable=True),))

        rendered = SQLAlchemyGenerator().render_entity(table)

        assert "    class_ = sa.Column('class', sa.Text, nullable=True)\n" in rendered

    def test_declarative_attribute_is_not_shadowed(self):
        """Test a 'metadata' column does not replace Base.metadata."""
        table = Table(name="docs", schema="public", columns=(Column("metadata", "jsonb"),))

        rendered = SQLAlchemyGenerator().render_entity(table)

        assert "    metadata_ = sa.Column('metadata', pg.JSONB, nullable=False)\n" in rendered
        assert "    metadata = " not in rendered

    def test_colliding_attribute_names_are_made_unique(self):
        """Test sanitized attribute names never collide within a table."""
        table = Table(
            name="t",
            schema="public",
            columns=(
                Column("class_", "text", is_primary_key=True),
                Column("class", "text"),
            ),
        )

        context = SQLAlchemyGenerator().build_context(table)

        assert context["pk_columns"][0].attribute_name == "class_"
        assert context["columns"][0].attribute_name == "class__"
        assert context["columns"][0].name == "class"


class TestTypeORMGenerator:
    """Test the permissive, file-per-table dialect."""

    def test_context_keeps_all_columns_in_order(self, user_account_table):
        """Test the TypeORM context keeps every column in order."""
        context = TypeORMGenerator().build_context(user_account_table)

        assert "pk_columns" not in context
        assert [c.name for c in context["columns"]] == ["id", "email", "tags"]
        assert [c.target_type for c in context["columns"]] == ["number", "string", "string[]"]

    def test_unmapped_type_falls_back_to_any(self, hstore_table):
        """Test an unknown type becomes 'any'."""
        context = TypeORMGenerator().build_context(hstore_table)

        assert context["columns"][1].target_type == "any"

    def test_unmapped_array_type_is_wrapped_once(self):
        """Test an unknown array type becomes 'any[]'."""
        table = Table(name="t", schema="public", columns=(Column("pairs", "hstore", is_array=True),))

        context = TypeORMGenerator().build_context(table)

        assert context["columns"][0].target_type == "any[]"

    def test_one_file_per_table(self, user_account_table, hstore_table, tmp_path):
        """Test each table gets its own file with the header."""
        artifacts = TypeORMGenerator().generate([hstore_table, user_account_table], tmp_path)

        assert [a.path for a in artifacts] == [tmp_path / "settings.ts", tmp_path / "user_account.ts"]
        for artifact in artifacts:
            assert artifact.content.startswith('import { Column, Entity, PrimaryColumn } from "typeorm";\n')
            assert artifact.content.count("@Entity(") == 1

    def test_renders_entity_file(self, user_account_table, tmp_path):
        """Test the rendered TypeORM entity file text."""
        artifact = TypeORMGenerator().generate([user_account_table], tmp_path)[0]

        assert artifact.content == USER_ACCOUNT_ENTITY

    def test_file_name_uses_original_table_name(self, tmp_path):
        """Test file names use the table name and classes the camel-cased one."""
        table = Table(name="audit-log", schema="public", columns=(Column("entry", "jsonb"),))

        artifact = TypeORMGenerator().generate([table], tmp_path)[0]

        assert artifact.path.name == "audit-log.ts"
        assert "export class AuditLog {" in artifact.content

    @pytest.mark.parametrize("table_name", ["../escaped", "nested/orders", "..\\escaped", "bad\0name"])
    def test_table_name_cannot_leave_output_directory(self, table_name, tmp_path):
        """Test table names with path separators are rejected."""
        table = Table(name=table_name, schema="public", columns=(Column("id", "integer", is_primary_key=True),))
        out_dir = tmp_path / "entities"

        with pytest.raises(OutputWriteError) as exc_info:
            TypeORMGenerator().generate([table], out_dir)

        assert table_name in exc_info.value.message
        assert not out_dir.exists()

    def test_dotted_table_name_stays_inside_output_directory(self, tmp_path):
        """Test a dotted table name is an ordinary file name."""
        table = Table(name="..", schema="public", columns=(Column("id", "integer", is_primary_key=True),))

        artifact = TypeORMGenerator().generate([table], tmp_path)[0]

        assert artifact.path.parent == tmp_path
        assert artifact.path.name == "...ts"


class TestWriteArtifacts:
    """Test writing artifacts to disk."""

    def test_writes_utf8_and_creates_directories(self, tmp_path):
        """Test artifacts are written as UTF-8 with parents created."""
        path = tmp_path / "nested" / "out.py"
        artifact = GeneratedArtifact(path=path, content="# café\n")

        written = write_artifacts([artifact])

        assert written == [path]
        assert path.read_text(encoding="utf-8") == "# café\n"

    def test_unwritable_path_raises(self, tmp_path):
        """Test a write failure raises OutputWriteError."""
        blocker = tmp_path / "file"
        blocker.write_text("x")
        artifact = GeneratedArtifact(path=blocker / "out.py", content="")

        with pytest.raises(OutputWriteError) as exc_info:
            write_artifacts([artifact])

        assert exc_info.value.code == "OUTPUT_WRITE_FAILED"
