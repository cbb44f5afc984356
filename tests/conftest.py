import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from grade_api.core.config import Settings
from grade_api.core.db import Base
from grade_api.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(DATABASE_URL=f"sqlite:///{tmp_path / 'grades.db'}", _env_file=None)


@pytest.fixture
def app_factory(settings: Settings):
    engine = create_engine(settings.DATABASE_URL)
    Base.metadata.create_all(engine)
    engine.dispose()

    def factory(**overrides):
        return create_app(settings.model_copy(update=overrides))

    return factory


@pytest.fixture
def app(app_factory):
    return app_factory()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
