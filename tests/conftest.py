import pytest

import theme
from storage import FileStore, InMemoryStore


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    monkeypatch.setattr(theme, '_ENABLE', False)


@pytest.fixture
def tasks_path(tmp_path):
    return tmp_path / "tasks.txt"


@pytest.fixture(params=['memory', 'file'])
def store(request, tasks_path):
    if request.param == 'memory':
        return InMemoryStore()
    return FileStore(tasks_path)
