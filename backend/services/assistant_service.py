"""AI assistant service - answers accounting questions through a hosted LLM."""

import logging
from dataclasses import dataclass
from typing import Callable

from sqlalchemy.orm import Session

from integrations.llm_client import LLMClient, create_llm_client
from models import AIConfig
from services.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)

ASSISTANT_NAME = "Sydney"

MISSING_FIELD = "Not provided"
NO_CONTEXT = " Limited context available"

SYSTEM_PROMPT_TEMPLATE = """You are {name}, an expert AI accounting assistant for Junyper, a modern accounting platform. You are knowledgeable, helpful, and speak in a professional yet friendly tone.

Your primary role is to help users with:
- Financial analysis and insights
- Accounting best practices and guidance
- Transaction categorization and reconciliation
- Business performance interpretation
- Invoice and payment management
- Cash flow analysis
- Tax preparation guidance
- Financial reporting explanations

IMPORTANT GUIDELINES:
- Always provide accurate, helpful accounting advice
- If you're unsure about specific regulations, recommend consulting a certified accountant
- Be concise but thorough in your explanations
- Use the user's business context to personalize your responses
- Never provide specific tax or legal advice - always recommend professional consultation for complex matters
- Focus on actionable insights and practical guidance

Current user business context:{context}

Respond to the user's question with helpful, practical accounting guidance."""

CONTEXT_TEMPLATE = """
- Company: {company}
- Industry: {industry}
- Connected Accounts: {accounts_summary}
- Recent Activity: {recent_activity}
- Invoice Count: {invoice_count}
- Customer Count: {customer_count}
- Total Revenue: {total_revenue}"""


@dataclass
class BusinessContext:
    """Optional facts about the user's business, supplied by the dashboard."""

    company: str | None = None
    industry: str | None = None
    accounts_summary: str | None = None
    recent_activity: str | None = None
    invoice_count: int | None = None
    customer_count: int | None = None
    total_revenue: float | None = None


def _or_missing(value) -> str:
    if value is None or value == "":
        return MISSING_FIELD
    return str(value)


def build_system_prompt(context: BusinessContext | None) -> str:
    """Render the assistant's system prompt for the given business context."""
    if context is None:
        rendered = NO_CONTEXT
    else:
        revenue = (
            f"${context.total_revenue:,.2f}"
            if context.total_revenue is not None
            else MISSING_FIELD
        )
        rendered = CONTEXT_TEMPLATE.format(
            company=_or_missing(context.company),
            industry=_or_missing(context.industry),
            accounts_summary=_or_missing(context.accounts_summary),
            recent_activity=_or_missing(context.recent_activity),
            invoice_count=_or_missing(context.invoice_count),
            customer_count=_or_missing(context.customer_count),
            total_revenue=revenue,
        )
    return SYSTEM_PROMPT_TEMPLATE.format(name=ASSISTANT_NAME, context=rendered)


class AssistantService:
    """Single-turn question answering; no conversation state is kept."""

    def __init__(
        self,
        client_factory: Callable[[str, str, str | None], LLMClient] = create_llm_client,
    ):
        self._client_factory = client_factory

    @staticmethod
    def load_config(db: Session) -> AIConfig:
        """Return the AI configuration row.

        Raises:
            ServiceUnavailableError: If no usable configuration is stored.
        """
        config = db.query(AIConfig).order_by(AIConfig.id).first()
        if config is None or not config.api_key:
            logger.error("AI configuration not found")
            raise ServiceUnavailableError(
                "AI service not configured. Please contact your administrator.",
                details="Missing API configuration",
            )
        return config

    def ask(self, db: Session, question: str, context: BusinessContext | None = None) -> str:
        """Answer ``question`` with the configured provider."""
        config = self.load_config(db)
        client = self._client_factory(config.model_provider, config.api_key, config.model_name)
        logger.info("Assistant request via %s (%s)", client.provider_name, client.model)
        return client.complete(build_system_prompt(context), question)
