from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from blog_backend.app import create_app
from blog_backend.infrastructure.container import Container
from blog_backend.infrastructure.db import init_db
from blog_backend.shared.config import AppConfig, DatabaseConfig, SecurityConfig
from blog_backend.tests.support import FAST_HASH_METHOD, FakeClock


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        APP_ENV="test",
        SECRET_KEY="unit-test-secret-key",
        LOG_FILE=tmp_path / "app.log",
        database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'blog.db'}"),
        security=SecurityConfig(
            PASSWORD_HASH_METHOD=FAST_HASH_METHOD,
            SESSION_LIFETIME=60 * 60 * 24,
        ),
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def container(app_config: AppConfig, clock: FakeClock) -> Iterator[Container]:
    container = Container(app_config, clock=clock)
    init_db(container.engine)
    yield container
    container.engine.dispose()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container=container)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
