import pytest
from fastapi.testclient import TestClient

from aisleplan.config import get_settings
from aisleplan.main import app


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def walmart_items():
    return {
        "Fresh Vegetables": [{"name": "carrot", "amount": "2"}],
        "Canned Vegetables": [{"name": "corn", "amount": "1 can"}],
        "Dairy": [{"name": "milk"}],
    }
