from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Supabase
    supabase_url: str = Field(..., alias="SUPABASE_URL")
    supabase_service_role_key: str = Field(..., alias="SUPABASE_SERVICE_ROLE_KEY")

    # LLM classification. Without an API key the keyword rules are used alone.
    llm_provider: str = Field("openai", alias="LLM_PROVIDER")
    llm_model: str = Field("gpt-4o-mini", alias="LLM_MODEL")
    llm_timeout_seconds: float = Field(5.0, alias="LLM_TIMEOUT_SECONDS", gt=0)
    llm_max_tokens: int = Field(20, alias="LLM_MAX_TOKENS", ge=2)

    # OpenAI
    openai_api_key: str | None = Field(None, alias="OPENAI_API_KEY")

    # Runtime
    log_level: str = Field("INFO", alias="LOG_LEVEL")


settings = Settings()
