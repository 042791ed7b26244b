import pytest

from storefront.core.staging import StagedQuantities
from storefront.core.state import ShopState
from tests.fakes import JsonServer


@pytest.fixture
def state():
    return ShopState()


@pytest.fixture
def staging():
    return StagedQuantities()


@pytest.fixture
def json_server():
    return JsonServer(
        inventory=[{"id": 1, "content": "Apple"}, {"id": 2, "content": "Banana"}],
        cart=[],
    )
