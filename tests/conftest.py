import pytest
from support import fake_client

from core.models import Client as AuthClient


@pytest.fixture
def svc1_client() -> AuthClient:
    return fake_client()
