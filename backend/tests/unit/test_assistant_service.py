"""Tests for the AI assistant service and prompt rendering."""

import pytest

from integrations.exceptions import ProviderAPIError
from models import AIConfig
from services.assistant_service import (
    AssistantService,
    BusinessContext,
    build_system_prompt,
)
from services.exceptions import ServiceUnavailableError
from tests.fixtures.mocks import MockLLMClient


class TestBuildSystemPrompt:
    def test_without_context(self):
        prompt = build_system_prompt(None)

        assert prompt.startswith("You are Sydney")
        assert "Current user business context: Limited context available" in prompt
        assert "Not provided" not in prompt

    def test_missing_fields_render_placeholder(self):
        prompt = build_system_prompt(BusinessContext(company="Acme Bakery"))

        assert "- Company: Acme Bakery" in prompt
        assert "- Industry: Not provided" in prompt
        assert "- Total Revenue: Not provided" in prompt

    def test_full_context(self):
        prompt = build_system_prompt(BusinessContext(
            company="Acme Bakery",
            industry="Food service",
            accounts_summary="2 checking accounts",
            recent_activity="12 transactions this week",
            invoice_count=14,
            customer_count=0,
            total_revenue=125000.5,
        ))

        assert "- Connected Accounts: 2 checking accounts" in prompt
        assert "- Invoice Count: 14" in prompt
        assert "- Customer Count: 0" in prompt
        assert "- Total Revenue: $125,000.50" in prompt


class TestAssistantService:
    def test_missing_config_is_unavailable(self, db):
        calls = []

        def factory(provider, api_key, model):
            calls.append(provider)
            return MockLLMClient()

        with pytest.raises(ServiceUnavailableError) as exc_info:
            AssistantService(client_factory=factory).ask(db, "What is EBITDA?")

        assert exc_info.value.details == "Missing API configuration"
        assert calls == []

    def test_config_without_key_is_unavailable(self, db):
        db.add(AIConfig(api_key="", model_provider="openai"))
        db.commit()

        with pytest.raises(ServiceUnavailableError):
            AssistantService.load_config(db)

    def test_dispatches_with_stored_config(self, db):
        db.add(AIConfig(api_key="sk-ant-test", model_provider="anthropic", model_name="claude-3-haiku-20240307"))
        db.commit()
        seen = {}
        llm = MockLLMClient(response="Use accrual accounting.")

        def factory(provider, api_key, model):
            seen.update(provider=provider, api_key=api_key, model=model)
            return llm

        answer = AssistantService(client_factory=factory).ask(
            db, "Cash or accrual?", BusinessContext(company="Acme")
        )

        assert answer == "Use accrual accounting."
        assert seen == {
            "provider": "anthropic",
            "api_key": "sk-ant-test",
            "model": "claude-3-haiku-20240307",
        }
        system, user = llm.prompts[0]
        assert user == "Cash or accrual?"
        assert "- Company: Acme" in system

    def test_llm_error_propagates(self, db, ai_config):
        service = AssistantService(client_factory=lambda *args: MockLLMClient(should_fail=True))

        with pytest.raises(ProviderAPIError, match="Incorrect API key"):
            service.ask(db, "Hello?")
