"""AIConfig model - credentials and provider selection for the assistant."""

from sqlalchemy import Column, Integer, String

from database import Base


class AIConfig(Base):
    """Single configuration row for the AI assistant."""

    __tablename__ = "ai_config"

    id = Column(Integer, primary_key=True, autoincrement=True)
    api_key = Column(String, nullable=True)
    model_provider = Column(String, nullable=False, default="openai")  # "openai" | "anthropic"
    model_name = Column(String, nullable=True)
