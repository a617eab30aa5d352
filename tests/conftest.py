import pytest

from routerscope.services.token_registry import TokenRegistry
from token_fixtures import FakeSource


@pytest.fixture
def source():
    return FakeSource()


@pytest.fixture
def registry(source):
    return TokenRegistry(source)


@pytest.fixture
def failing_registry():
    return TokenRegistry(FakeSource(error=ValueError("upstream returned garbage")))
