from types import SimpleNamespace

import pytest

from larapipe.support import Config


@pytest.fixture(autouse=True)
def clean_config():
    Config.clear_runtime_overrides()
    yield
    Config.clear_runtime_overrides()


@pytest.fixture
def make_request():
    def factory(path='/', method='GET', **attrs):
        return SimpleNamespace(path=path, method=method, **attrs)
    return factory


@pytest.fixture
def calls():
    """Shared call log for filters and handlers"""
    return []
