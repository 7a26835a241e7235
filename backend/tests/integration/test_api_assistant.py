"""Integration tests for the AI assistant endpoint."""

from api.assistant import APOLOGY, get_assistant_service
from main import app
from services.assistant_service import AssistantService
from tests.fixtures.mocks import MockLLMClient


class TestAskAssistant:
    def test_answers_question(self, client, ai_config, mock_llm_client):
        response = client.post(
            "/api/assistant", json={"question": "How do I record a refund?"}
        )

        assert response.status_code == 200
        assert response.json() == {"response": "Mock assistant answer"}
        system, user = mock_llm_client.prompts[0]
        assert user == "How do I record a refund?"
        assert "Limited context available" in system

    def test_context_rendered_into_prompt(self, client, ai_config, mock_llm_client):
        response = client.post("/api/assistant", json={
            "question": "How is my cash flow?",
            "context": {
                "company": "Acme Bakery",
                "accountsSummary": "2 checking accounts",
                "invoiceCount": 12,
                "totalRevenue": 15250.5,
            },
        })

        assert response.status_code == 200
        system, _ = mock_llm_client.prompts[0]
        assert "- Company: Acme Bakery" in system
        assert "- Industry: Not provided" in system
        assert "- Connected Accounts: 2 checking accounts" in system
        assert "- Invoice Count: 12" in system
        assert "- Total Revenue: $15,250.50" in system

    def test_not_configured(self, client, mock_llm_client):
        response = client.post("/api/assistant", json={"question": "Hello?"})

        assert response.status_code == 503
        assert response.json() == {
            "error": "AI service not configured. Please contact your administrator.",
            "details": "Missing API configuration",
        }
        assert mock_llm_client.prompts == []

    def test_provider_failure(self, client, ai_config):
        failing = MockLLMClient(should_fail=True)
        app.dependency_overrides[get_assistant_service] = lambda: AssistantService(
            client_factory=lambda provider, api_key, model: failing
        )

        response = client.post("/api/assistant", json={"question": "Hello?"})

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == APOLOGY
        assert "Incorrect API key" in data["details"]

    def test_missing_question(self, client, ai_config):
        response = client.post("/api/assistant", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "question is required"

    def test_empty_question(self, client, ai_config, mock_llm_client):
        response = client.post("/api/assistant", json={"question": ""})

        assert response.status_code == 400
        assert response.json()["error"] == "question is required"
        assert mock_llm_client.prompts == []
