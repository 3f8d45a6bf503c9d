from logging.config import fileConfig

from sqlalchemy import engine_from_config
from sqlalchemy import pool

from alembic import context

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Inject application settings for DB URL
import logging
import os
from geography.core.config import settings  # type: ignore

logger = logging.getLogger("alembic.env")

# DATABASE_URL in the environment wins; otherwise settings (.env, MYSQL_* vars)
sqlalchemy_url = os.getenv("DATABASE_URL") or settings.sqlalchemy_url
config.set_main_option("sqlalchemy.url", sqlalchemy_url.replace("%", "%%"))

from geography.db.models import Base  # noqa: E402

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Emits the SQL to the script output instead of executing it; no DBAPI
    connection is required.
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode against a live connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    try:
        with connectable.connect() as connection:
            context.configure(connection=connection, target_metadata=target_metadata)

            with context.begin_transaction():
                context.run_migrations()
    except Exception:
        logger.error(
            "Database migration failed for %s (set DATABASE_URL or MYSQL_HOST/MYSQL_USER/MYSQL_PASSWORD)",
            connectable.url.render_as_string(hide_password=True),
        )
        raise


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
