"""Main entry point for the patient intake service using Typer and Pydantic Settings."""

import typer
import uvicorn
from loguru import logger

from patient_intake.logging import setup_logging, setup_sqlalchemy_logging
from patient_intake.settings import get_settings, normalize_log_level

app = typer.Typer(no_args_is_help=True)


HOST_OPTION = typer.Option(
    None,
    help="Host to bind the server to (overrides PATIENT_INTAKE_HOST)",
    metavar="<server>",
)  # fmt: skip
PORT_OPTION = typer.Option(
    None,
    help="Port to bind the server to (overrides PATIENT_INTAKE_PORT)",
    metavar="<port>",
)  # fmt: skip
RELOAD_OPTION = typer.Option(
    None,
    help="Enable/disable auto-reload (overrides PATIENT_INTAKE_RELOAD)",
)  # fmt: skip
LOG_LEVEL_OPTION = typer.Option(
    None,
    help="Log level (overrides PATIENT_INTAKE_LOG_LEVEL)",
    metavar="<level>",
    case_sensitive=False,
)  # fmt: skip
DATABASE_URL_OPTION = typer.Option(
    None,
    help="Database URL (overrides PATIENT_INTAKE_DATABASE_URL)",
    metavar="<dsn>",
)  # fmt: skip
AUDIT_LOG_FILE_OPTION = typer.Option(
    None,
    help="File receiving serialized audit records (overrides PATIENT_INTAKE_AUDIT_LOG_FILE)",
    metavar="<path>",
)  # fmt: skip


def _update_settings(
    host: str | None = None,
    port: int | None = None,
    log_level: str | None = None,
    reload: bool | None = None,
    database_url: str | None = None,
    audit_log_file: str | None = None,
) -> None:
    """Update settings with CLI overrides.

    Args:
        host: Host override
        port: Port override
        log_level: Log level override, validated before it is applied
        reload: Reload override
        database_url: Database URL override
        audit_log_file: Audit log file override

    Raises:
        typer.BadParameter: If the log level is unknown
    """
    settings = get_settings()

    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if log_level is not None:
        try:
            settings.log_level = normalize_log_level(log_level)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--log-level") from None
    if reload is not None:
        settings.reload = reload
    if database_url is not None:
        settings.database_url = database_url
    if audit_log_file is not None:
        settings.audit_log_file = audit_log_file


@app.command()
def run(
    host: str = HOST_OPTION,
    port: int = PORT_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
    reload: bool = RELOAD_OPTION,
    database_url: str = DATABASE_URL_OPTION,
    audit_log_file: str = AUDIT_LOG_FILE_OPTION,
) -> None:
    """Run the patient intake server."""
    _update_settings(host, port, log_level, reload, database_url, audit_log_file)

    settings = get_settings()

    setup_logging(settings.log_level, settings.audit_log_file)

    logger.info(f"Starting patient intake service on {settings.host}:{settings.port}")
    logger.info(f"Reload: {settings.reload}")

    # Run the app - use import string for reload mode
    if settings.reload:
        uvicorn.run(
            "patient_intake.app:app",
            host=settings.host,
            port=settings.port,
            reload=True,
            log_level=settings.log_level.lower(),
        )
    else:
        from patient_intake.app import app as fastapi_app

        uvicorn.run(
            fastapi_app,
            host=settings.host,
            port=settings.port,
            reload=False,
            log_level=settings.log_level.lower(),
        )


@app.command("init-db")
def init_database(
    log_level: str = LOG_LEVEL_OPTION,
    database_url: str = DATABASE_URL_OPTION,
) -> None:
    """Create the patient tables, then exit."""
    _update_settings(log_level=log_level, database_url=database_url)

    settings = get_settings()

    setup_logging(settings.log_level)
    setup_sqlalchemy_logging()

    from patient_intake.database import dispose_db, init_db

    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {type(e).__name__}")
        raise SystemExit(1) from None
    finally:
        dispose_db()


if __name__ == "__main__":
    app()
