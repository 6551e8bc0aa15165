"""
Tests for the moviegraph command line interface
"""

import json

from click.testing import CliRunner

from moviegraph.cli import cli
from moviegraph.config import settings
from moviegraph.database.cli import ALEMBIC_INI_ENV, find_alembic_ini, get_alembic_config


class TestQueryCommand:
    def test_runs_query_against_seeded_store(self):
        runner = CliRunner()

        result = runner.invoke(cli, ["query", '{ movie(id: "naeeurehnin") { title } }'])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"data": {"movie": {"title": "Aladdin"}}}

    def test_mutation_with_user_and_variables(self):
        runner = CliRunner()
        document = "mutation Add($movie: MovieInput!) { addMovie(movie: $movie) { title } }"

        result = runner.invoke(
            cli,
            [
                "query",
                document,
                "--variables",
                json.dumps({"movie": {"title": "Mulan"}}),
                "--user",
                "fakeUserId",
            ],
        )

        assert result.exit_code == 0, result.output
        titles = [movie["title"] for movie in json.loads(result.output)["data"]["addMovie"]]
        assert titles == ["Aladdin", "The Little Mermaid", "Mulan"]

    def test_reads_document_from_file(self, tmp_path):
        document = tmp_path / "movies.graphql"
        document.write_text("{ movies { id } }")
        runner = CliRunner()

        result = runner.invoke(cli, ["query", f"@{document}"])

        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)["data"]["movies"]) == 2

    def test_invalid_document_exits_nonzero(self):
        runner = CliRunner()

        result = runner.invoke(cli, ["query", "{ nope }"])

        assert result.exit_code == 1
        assert json.loads(result.output)["errors"]

    def test_invalid_variables(self):
        runner = CliRunner()

        result = runner.invoke(cli, ["query", "{ movies { id } }", "--variables", "{bad"])

        assert result.exit_code == 2
        assert "Invalid JSON" in result.output


class TestMigrateConfig:
    def test_env_override_is_used(self, tmp_path, monkeypatch):
        ini = tmp_path / "alembic.ini"
        ini.write_text("[alembic]\nscript_location = alembic\n")
        monkeypatch.setenv(ALEMBIC_INI_ENV, str(ini))
        monkeypatch.setenv("MOVIEGRAPH_DATABASE_URL", "postgresql://u:p%40ss@db/movies")

        assert find_alembic_ini() == ini
        config = get_alembic_config()
        assert config.get_main_option("sqlalchemy.url") == "postgresql://u:p%40ss@db/movies"

    def test_checkout_ini_is_found(self, tmp_path, monkeypatch):
        monkeypatch.delenv(ALEMBIC_INI_ENV, raising=False)
        monkeypatch.chdir(tmp_path)

        assert find_alembic_ini().name == "alembic.ini"

    def test_missing_override_falls_back(self, tmp_path, monkeypatch):
        monkeypatch.setenv(ALEMBIC_INI_ENV, str(tmp_path / "missing.ini"))
        monkeypatch.chdir(tmp_path)

        assert find_alembic_ini() != tmp_path / "missing.ini"


class TestSeedCommand:
    def test_seeds_memory_store(self):
        result = CliRunner().invoke(cli, ["seed"])

        assert result.exit_code == 0, result.output
        assert "Seeded 2 movie(s) and 1 actor(s)" in result.output

    def test_seeds_database_store_once(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "store_backend", "database")
        monkeypatch.setenv("MOVIEGRAPH_DATABASE_URL", f"sqlite:///{tmp_path / 'movies.db'}")
        runner = CliRunner()

        first = runner.invoke(cli, ["seed", "--create-tables"])
        second = runner.invoke(cli, ["seed"])

        assert first.exit_code == 0, first.output
        assert "Seeded 2 movie(s) and 1 actor(s)" in first.output
        assert second.exit_code == 0, second.output
        assert "Seeded 0 movie(s) and 0 actor(s)" in second.output

    def test_unreachable_database_fails(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "store_backend", "database")
        monkeypatch.setenv(
            "MOVIEGRAPH_DATABASE_URL", f"sqlite:///{tmp_path / 'missing' / 'movies.db'}"
        )

        result = CliRunner().invoke(cli, ["seed", "--create-tables"])

        assert result.exit_code == 1
        assert "Error seeding store" in result.output
