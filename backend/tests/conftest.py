"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.assistant import get_assistant_service
from api.plaid import get_plaid_client
from config import Settings, get_settings
from database import Base, enable_sqlite_savepoints, get_db
from main import app
from services.assistant_service import AssistantService
# Pytest fixtures - imported to make them available to tests
from tests.fixtures import (  # noqa: F401
    ai_config,
    connected_bank,
    ledger_accounts,
    plaid_account,
    recently_synced_account,
    user_profile,
    vendor_bill,
)
from tests.fixtures.mocks import (
    SAMPLE_INSTITUTION,
    MockLLMClient,
    MockPlaidClient,
    make_account_data,
)
from integrations.provider_protocol import AccountsResult


@pytest.fixture(name="db")
def db_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="test_settings")
def test_settings_fixture():
    """Settings with Plaid credentials present, independent of the environment."""
    return Settings(
        _env_file=None,
        PLAID_CLIENT_ID="test-client-id",
        PLAID_SECRET="test-secret",
        PLAID_ENVIRONMENT="sandbox",
        ACCOUNT_FETCH_WORKERS=4,
    )


@pytest.fixture(name="mock_plaid_client")
def mock_plaid_client_fixture():
    """Mock Plaid client serving one checking account for the test access token."""
    return MockPlaidClient(
        accounts={
            "access-sandbox-test": AccountsResult(
                accounts=[make_account_data()],
                institution_id="ins_109508",
            ),
        },
        institutions={"ins_109508": SAMPLE_INSTITUTION},
    )


@pytest.fixture(name="mock_llm_client")
def mock_llm_client_fixture():
    return MockLLMClient()


@pytest.fixture(name="client")
def client_fixture(db, test_settings, mock_plaid_client, mock_llm_client):
    """Create a test client with the test database and mocked upstream APIs."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    def override_get_assistant_service():
        return AssistantService(client_factory=lambda provider, api_key, model: mock_llm_client)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_plaid_client] = lambda: mock_plaid_client
    app.dependency_overrides[get_assistant_service] = override_get_assistant_service
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
