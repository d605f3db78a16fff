"""
Shared fixtures: in-memory SQLite store and a mocked IFSC verification API.
"""

import json
import os

# Must be set before anything under app/ reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database.create_database import create_all_tables
from app.database.database import get_db
from app.utils.ifsc_api_service import IFSCVerificationAPI, get_ifsc_api
from main import app

VERIFY_URL = "https://ifsc.test/api/validateIFSCStatic"

BANK_RESPONSE = {
    "data": {
        "bankName": "State Bank of India",
        "bankBranchName": "Mumbai Main Branch",
        "address": "Horniman Circle, Fort",
        "cityAndPincode": "Mumbai 400001",
        "countryCode": "IN",
        "networkType": "NEFT",
        "routingNo": "400002001",
        "stateCode": "MH",
    }
}


class FakeBankAPI:
    """Stands in for the IFSC verification endpoint behind httpx.MockTransport"""

    def __init__(self):
        self.calls = []
        self.status_code = 200
        self.body = BANK_RESPONSE
        self.raw_body = None
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(json.loads(request.content))
        if self.error is not None:
            raise self.error(f"{self.error.__name__} simulated", request=request)
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def bank_api():
    return FakeBankAPI()


@pytest.fixture
def ifsc_client(bank_api):
    return IFSCVerificationAPI(
        verify_url=VERIFY_URL,
        client=httpx.AsyncClient(transport=httpx.MockTransport(bank_api.handler)),
    )


@pytest.fixture
def client(session_factory, ifsc_client):
    """TestClient wired to the in-memory database and the fake bank API"""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ifsc_api] = lambda: ifsc_client
    yield TestClient(app)
    app.dependency_overrides.clear()
