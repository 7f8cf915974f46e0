"""
Pytest configuration and shared fixtures for platformsh_config tests.
"""

import sys
from pathlib import Path

import pytest

# Add packages to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "packages"))

from platformsh_config.decoding import encode_json_variable as encode_json
from platformsh_config.injection import GlobalInjector


@pytest.fixture(autouse=True)
def fresh_injector(monkeypatch):
    """
    Give every test its own injector so singletons (settings, formatter registry,
    signals) never leak between tests. Library settings are isolated from the
    developer's shell as well.
    """
    for name in ("PLATFORMSH_CONFIG_STRICT_DECODING", "PLATFORMSH_CONFIG_VARIABLE_PREFIX"):
        monkeypatch.delenv(name, raising=False)

    GlobalInjector.reset()
    yield
    GlobalInjector.reset()


@pytest.fixture
def relationships_document():
    return {
        "database": [
            {
                "host": "database.internal",
                "username": "user",
                "password": "secret",
                "ip": "169.254.10.1",
                "path": "main",
                "scheme": "mysql",
                "port": 3306,
                "query": {"is_master": True},
            }
        ],
        "redis": [
            {
                "host": "redis-0.internal",
                "ip": "169.254.20.1",
                "scheme": "redis",
                "port": 6379,
                "query": {"is_master": True},
            },
            {
                "host": "redis-1.internal",
                "ip": "169.254.20.2",
                "scheme": "redis",
                "port": 6379,
                "query": {"is_master": False},
            },
        ],
        "empty": [],
    }


@pytest.fixture
def routes_document():
    return {
        "https://www.example.com/": {
            "type": "upstream",
            "upstream": "app",
            "original_url": "https://www.{default}/",
            "id": "main",
            "primary": True,
        },
        "https://example.com/": {
            "type": "redirect",
            "to": "https://www.example.com/",
            "original_url": "https://{default}/",
            "id": None,
            "primary": False,
        },
    }


@pytest.fixture
def build_env():
    """Variables present while build hooks run (no environment tier yet)."""
    return {
        "PLATFORM_APPLICATION_NAME": "app",
        "PLATFORM_APP_DIR": "/app",
        "PLATFORM_TREE_ID": "abc123",
        "PLATFORM_PROJECT": "projectid",
        "PLATFORM_PROJECT_ENTROPY": "entropy-seed",
        "PLATFORM_VARIABLES": encode_json({"somekey": "someval", "env:FEATURE": "on"}),
        "PLATFORM_APPLICATION": encode_json({"name": "app", "type": "python:3.11"}),
    }


@pytest.fixture
def runtime_env(build_env, relationships_document, routes_document):
    """A complete runtime environment on a standard (non-enterprise) project."""
    return {
        **build_env,
        "PLATFORM_DOCUMENT_ROOT": "/app/web",
        "PLATFORM_BRANCH": "feature-x",
        "PLATFORM_ENVIRONMENT": "feature-x-hgi456y",
        "PLATFORM_SMTP_HOST": "1.2.3.4",
        "PLATFORM_MODE": "",
        "PLATFORM_RELATIONSHIPS": encode_json(relationships_document),
        "PLATFORM_ROUTES": encode_json(routes_document),
        "SOCKET": "/run/app.sock",
        "PORT": "8080",
    }
