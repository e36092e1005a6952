import os
from functools import lru_cache
from typing import List, Optional
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()

DEFAULT_ORIGINS = "http://localhost:3000,http://localhost:5173"


class Settings(BaseModel):
    llm_api_key: Optional[str] = None
    llm_base_url: str = "https://api.groq.com/openai/v1"
    llm_model: str = "llama-3.3-70b-versatile"
    llm_temperature: float = 0.7
    http_timeout: float = Field(10.0, gt=0)
    whois_timeout: float = Field(10.0, gt=0)
    phishtank_url: str = "https://checkurl.phishtank.com/checkurl/"
    phishtank_app_key: Optional[str] = None
    ai_text_limit: int = Field(15000, gt=0)
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: DEFAULT_ORIGINS.split(","))

    @classmethod
    def from_env(cls, env=None) -> "Settings":
        env = os.environ if env is None else env
        values = {
            "llm_api_key": env.get("LLM_API_KEY") or env.get("GROQ_API_KEY") or env.get("OPENAI_API_KEY"),
            "llm_base_url": env.get("LLM_BASE_URL"),
            "llm_model": env.get("LLM_MODEL") or env.get("GROQ_MODEL"),
            "llm_temperature": env.get("LLM_TEMPERATURE"),
            "http_timeout": env.get("HTTP_TIMEOUT"),
            "whois_timeout": env.get("WHOIS_TIMEOUT"),
            "phishtank_url": env.get("PHISHTANK_URL"),
            "phishtank_app_key": env.get("PHISHTANK_APP_KEY"),
            "ai_text_limit": env.get("AI_TEXT_LIMIT"),
            "log_level": env.get("LOG_LEVEL"),
        }
        origins = env.get("CORS_ORIGINS")
        if origins:
            values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]
        # unset variables fall through to the model defaults
        return cls(**{k: v for k, v in values.items() if v is not None})


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
