import logging
import subprocess
from unittest.mock import MagicMock, patch

from click.testing import CliRunner
from sqlalchemy.exc import OperationalError

from manage import cli, main

log = logging.getLogger(__name__)


def test_generate_migration_success():
    """Test the generate-migration command successfully generates a migration."""
    runner = CliRunner()
    with patch("subprocess.run") as mock_run:
        result = runner.invoke(cli, ["generate-migration", "-m", "add resumes"])
        assert result.exit_code == 0
        assert "Generating new migration..." in result.output
        assert "Successfully generated new migration: add resumes" in result.output
        mock_run.assert_called_once_with(
            ["alembic", "revision", "--autogenerate", "-m", "add resumes"], check=True
        )


def test_generate_migration_called_process_error():
    """Test the generate-migration command handles CalledProcessError."""
    runner = CliRunner()
    with patch("subprocess.run") as mock_run:
        mock_run.side_effect = subprocess.CalledProcessError(1, "cmd")
        result = runner.invoke(cli, ["generate-migration", "-m", "add resumes"])
        assert result.exit_code == 0
        assert "An error occurred while generating migration:" in result.output


def test_generate_migration_missing_message():
    """Test the generate-migration command fails if the message is missing."""
    runner = CliRunner()
    result = runner.invoke(cli, ["generate-migration"])
    assert result.exit_code != 0
    assert "--message" in result.output


def test_apply_migrations_success():
    """Test the apply-migrations command successfully applies migrations."""
    runner = CliRunner()
    with patch("subprocess.run") as mock_run:
        result = runner.invoke(cli, ["apply-migrations"])
        assert result.exit_code == 0
        assert "Successfully applied all migrations." in result.output
        mock_run.assert_called_once_with(["alembic", "upgrade", "head"], check=True)


def test_apply_migrations_file_not_found_error():
    """Test the apply-migrations command handles a missing alembic executable."""
    runner = CliRunner()
    with patch("subprocess.run", side_effect=FileNotFoundError):
        result = runner.invoke(cli, ["apply-migrations"])
        assert result.exit_code == 0
        assert "Error: 'alembic' command not found." in result.output


@patch("manage.seed_demo_resume")
@patch("manage.get_session_local")
def test_seed_demo_success(mock_get_session_local, mock_seed):
    """Test that seed-demo creates the demo resume and closes the session."""
    mock_db = MagicMock()
    mock_get_session_local.return_value = MagicMock(return_value=mock_db)
    mock_seed.return_value = MagicMock(id=42)

    runner = CliRunner()
    result = runner.invoke(cli, ["seed-demo", "--user-id", "demo"])

    assert result.exit_code == 0
    assert "Seeding demo resume for 'demo'..." in result.output
    assert "Demo resume created with id 42." in result.output
    mock_seed.assert_called_once_with(db=mock_db, user_id="demo")
    mock_db.close.assert_called_once()


@patch("manage.seed_demo_resume")
@patch("manage.get_session_local")
def test_seed_demo_database_error(mock_get_session_local, mock_seed):
    """Test that seed-demo rolls back and reports a database error."""
    mock_db = MagicMock()
    mock_get_session_local.return_value = MagicMock(return_value=mock_db)
    mock_seed.side_effect = OperationalError("INSERT", {}, Exception("db down"))

    runner = CliRunner()
    result = runner.invoke(cli, ["seed-demo", "--user-id", "demo"])

    assert result.exit_code == 0
    assert "Error seeding demo resume:" in result.output
    mock_db.rollback.assert_called_once()
    mock_db.close.assert_called_once()


def test_seed_demo_requires_user_id():
    runner = CliRunner()
    result = runner.invoke(cli, ["seed-demo"])
    assert result.exit_code != 0


@patch("manage.cli")
def test_main(mock_cli):
    main()
    mock_cli.assert_called_once()
