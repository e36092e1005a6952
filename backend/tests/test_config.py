from futuresafe.core.config import Settings
from futuresafe.core.llm import PROMPT_LIMIT, sanitize_prompt


def test_defaults_when_env_is_empty():
    settings = Settings.from_env({})
    assert settings.llm_api_key is None
    assert settings.llm_model == "llama-3.3-70b-versatile"
    assert settings.http_timeout == 10.0
    assert settings.ai_text_limit == 15000


def test_env_overrides():
    settings = Settings.from_env({
        "GROQ_API_KEY": "gk",
        "HTTP_TIMEOUT": "3.5",
        "AI_TEXT_LIMIT": "500",
        "CORS_ORIGINS": "http://a, http://b ,",
    })
    assert settings.llm_api_key == "gk"
    assert settings.http_timeout == 3.5
    assert settings.ai_text_limit == 500
    assert settings.cors_origins == ["http://a", "http://b"]


def test_llm_key_precedence():
    assert Settings.from_env({"LLM_API_KEY": "a", "GROQ_API_KEY": "b"}).llm_api_key == "a"


def test_sanitize_prompt_collapses_whitespace_and_caps():
    assert sanitize_prompt("  a \n\n b\tc ") == "a b c"
    assert len(sanitize_prompt("x" * (PROMPT_LIMIT + 10))) == PROMPT_LIMIT
