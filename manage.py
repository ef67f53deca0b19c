import logging
import subprocess

import click

from resume_builder.app.api.routes.route_logic.seed_crud import seed_demo_resume
from resume_builder.app.database.database import get_session_local


log = logging.getLogger(__name__)


@click.group()
def cli():
    """Management script for the Resume Builder application."""
    pass


@cli.command("generate-migration")
@click.option(
    "-m",
    "--message",
    required=True,
    help="A short message describing the migration.",
)
def generate_migration(message: str):
    """
    Generate a new database migration script.

    This command wraps 'alembic revision --autogenerate'.

    Args:
        message (str): A short message describing the migration.

    Notes:
        1. Executes the 'alembic revision --autogenerate' command as a subprocess.
        2. On failure, prints an error message.

    """
    _msg = "generate_migration starting"
    log.debug(_msg)
    click.echo("Generating new migration...")
    try:
        command = ["alembic", "revision", "--autogenerate", "-m", message]
        subprocess.run(command, check=True)
        _success_msg = f"Successfully generated new migration: {message}"
        click.echo(_success_msg)
        log.info(_success_msg)
    except subprocess.CalledProcessError as e:
        _error_msg = f"An error occurred while generating migration: {e}"
        click.echo(_error_msg, err=True)
        log.exception(_error_msg)
    except FileNotFoundError:
        _error_msg = "Error: 'alembic' command not found. Make sure Alembic is installed and in your PATH."
        click.echo(_error_msg, err=True)
        log.exception(_error_msg)
    _msg = "generate_migration returning"
    log.debug(_msg)


@cli.command("apply-migrations")
def apply_migrations():
    """
    Apply all pending migrations to the database.

    This command wraps 'alembic upgrade head'.

    """
    _msg = "apply_migrations starting"
    log.debug(_msg)
    click.echo("Applying database migrations...")
    try:
        command = ["alembic", "upgrade", "head"]
        subprocess.run(command, check=True)
        _success_msg = "Successfully applied all migrations."
        click.echo(_success_msg)
        log.info(_success_msg)
    except subprocess.CalledProcessError as e:
        _error_msg = f"An error occurred while applying migrations: {e}"
        click.echo(_error_msg, err=True)
        log.exception(_error_msg)
    except FileNotFoundError:
        _error_msg = "Error: 'alembic' command not found. Make sure Alembic is installed and in your PATH."
        click.echo(_error_msg, err=True)
        log.exception(_error_msg)
    _msg = "apply_migrations returning"
    log.debug(_msg)


@cli.command("seed-demo")
@click.option("--user-id", required=True, help="Owner of the demo resume and its records.")
def seed_demo(user_id: str):
    """
    Create a demo resume with a position and bullets.

    Args:
        user_id (str): The owner of the demo records.

    Notes:
        1. Establishes a database connection.
        2. Calls `seed_demo_resume` and prints the new resume's id.
        3. On a database error, prints an error message.

    """
    _msg = "seed_demo starting"
    log.debug(_msg)
    click.echo(f"Seeding demo resume for '{user_id}'...")

    db_session_local = get_session_local()
    db = db_session_local()
    try:
        resume = seed_demo_resume(db=db, user_id=user_id)
        _success_msg = f"Demo resume created with id {resume.id}."
        click.echo(_success_msg)
        log.info(_success_msg)
    except Exception as e:
        db.rollback()
        _error_msg = f"Error seeding demo resume: {e}"
        click.echo(_error_msg, err=True)
        log.exception(_error_msg)
    finally:
        db.close()

    _msg = "seed_demo returning"
    log.debug(_msg)


def main():
    """Run the command line interface."""
    cli()


if __name__ == "__main__":
    main()
