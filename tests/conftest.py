import pytest

from tests.fakes import PromiseFactory


@pytest.fixture
def pf() -> PromiseFactory:
    return PromiseFactory()
