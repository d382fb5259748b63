"""
EcoViz — Configuration
Settings are read from the environment and an optional .env file.
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Application ──────────────────────────────────────────────────────
    APP_NAME: str = "EcoViz"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # ── Database ─────────────────────────────────────────────────────────
    DATABASE_URL: str = "postgresql+asyncpg://ecoviz:changeme@db:5432/ecoviz"

    # ── OpenRouter AI ────────────────────────────────────────────────────
    OPENROUTER_API_KEY: str = ""
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    AI_ANALYSIS_ENABLED: bool = True
    AI_MODELS_FREE: str = "google/gemini-2.0-flash-exp:free,meta-llama/llama-3.3-70b-instruct:free"
    AI_MODELS_PAID: str = "google/gemini-2.5-flash,openai/gpt-4.1-mini"
    AI_TIMEOUT_SECONDS: float = 60.0
    AI_MAX_TOKENS: int = 500

    # ── Email (SMTP) ─────────────────────────────────────────────────────
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    EMAIL_FROM_ADDRESS: str = "no-reply@ecoviz.app"

    # ── Branding ─────────────────────────────────────────────────────────
    BRAND_URL: str = "https://ecoviz.app"

    @property
    def cors_origin_list(self) -> list:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def ai_models(self) -> list:
        """Free models first, then paid, as (model, tier) pairs."""
        free_models = [m.strip() for m in self.AI_MODELS_FREE.split(",") if m.strip()]
        paid_models = [m.strip() for m in self.AI_MODELS_PAID.split(",") if m.strip()]
        return [(m, "free") for m in free_models] + [(m, "paid") for m in paid_models]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
