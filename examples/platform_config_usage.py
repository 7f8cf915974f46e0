"""
Examples of reading the platform environment from an application.

Run locally with a fake environment:
    python examples/platform_config_usage.py
"""

import logging

from platformsh_config import (
    MappingEnvironmentReader,
    LookupMiss,
    NotValidPlatformError,
    new_build_config,
    new_runtime_config,
)
from platformsh_config.decoding import encode_json_variable


def build_hook(reader=None):
    """What a build hook typically needs: tree id for cache busting, variables."""
    try:
        config = new_build_config(reader)
    except NotValidPlatformError:
        print("Not on the platform, skipping build configuration")
        return

    print(f"Building {config.application_name} at tree {config.tree_id}")
    print(f"Debug mode: {config.variable('DEBUG', 'off')}")


def web_app(reader=None):
    config = new_runtime_config(reader)

    # Third parties register their own formatters next to the built-in 'sqldsn'
    config.register_formatter(
        "postgresql_url",
        lambda c: f"postgresql://{c.username}:{c.password}@{c.host}:{c.port}/{c.path}",
    )

    try:
        dsn = config.formatted_credentials("database", "sqldsn")
    except LookupMiss:
        dsn = "sqlite:///local.db"

    print(f"Listening on port {config.port or '8000'} (production={config.on_production()})")
    print(f"Database DSN: {dsn}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    fake_environment = MappingEnvironmentReader(
        {
            "PLATFORM_APPLICATION_NAME": "app",
            "PLATFORM_TREE_ID": "d4c0ffee",
            "PLATFORM_ENVIRONMENT": "main-bvxea6i",
            "PLATFORM_BRANCH": "master",
            "PLATFORM_VARIABLES": encode_json_variable({"DEBUG": "on"}),
            "PLATFORM_RELATIONSHIPS": encode_json_variable(
                {
                    "database": [
                        {
                            "host": "database.internal",
                            "username": "user",
                            "password": "",
                            "path": "main",
                            "scheme": "mysql",
                            "port": 3306,
                            "query": {"is_master": True},
                        }
                    ]
                }
            ),
            "PORT": "8888",
        }
    )

    build_hook(fake_environment)
    web_app(fake_environment)
