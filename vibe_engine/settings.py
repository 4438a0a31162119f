# vibe_engine/settings.py
import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PROMPTS_PATH = Path(__file__).resolve().parent / "prompts" / "personas.yaml"


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="Vibe Engine")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    # model backend: echo | openai | ollama
    MODEL_BACKEND: str = Field(default="echo")
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = Field(default="gpt-4o-mini")
    OLLAMA_HOST: str = Field(default="http://localhost:11434")
    OLLAMA_MODEL: str = Field(default="mistral:7b-instruct")

    # prompt store
    PROMPTS_PATH: str = Field(default=str(DEFAULT_PROMPTS_PATH))

    # retrieval (researcher grounding); disabled when SEARCH_DB_PATH is unset
    SEARCH_DB_PATH: str | None = None
    SEARCH_FAISS_PATH: str | None = None
    SEARCH_TOP_K: int = Field(default=6)
    EMBED_MODEL: str = Field(default="bge-m3:latest")

    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME


settings = Settings()
