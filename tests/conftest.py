import json
import pytest

from clientes_api.main import app
from clientes_api.db.storage import JsonFileClienteRepository, get_repository


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "clientes.json"
    path.write_text("[]", encoding="utf-8")
    return path


@pytest.fixture
def use_repository():
    """Route the app to a given repository for the duration of a test."""
    def _use(repo):
        app.dependency_overrides[get_repository] = lambda: repo
        return repo

    yield _use
    app.dependency_overrides.clear()


@pytest.fixture
def repo(data_file, use_repository):
    return use_repository(JsonFileClienteRepository(data_file))


def write_clientes(path, clientes):
    path.write_text(json.dumps(clientes, indent=2, ensure_ascii=False), encoding="utf-8")


def read_clientes(path):
    return json.loads(path.read_text(encoding="utf-8"))
