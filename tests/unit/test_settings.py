from relay.core.config import Settings
from relay.core.logging import truncate_prompt


def test_defaults():
    settings = Settings(_env_file=None, gemini_key="k")

    assert settings.get_generate_url() == (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-2.5-flash:generateContent"
    )
    assert settings.max_prompt_chars == 10000
    assert settings.gemini_temperature == 0.7
    assert settings.gemini_max_output_tokens == 2048
    assert settings.cors_allow_origin == "*"


def test_credential_read_from_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_KEY", "from-env")
    assert Settings(_env_file=None).gemini_key == "from-env"


def test_blank_credential_is_missing():
    assert not Settings(_env_file=None, gemini_key="  ").has_credential()
    assert not Settings(_env_file=None, gemini_key=None).has_credential()
    assert Settings(_env_file=None, gemini_key="abc").has_credential()


def test_environment_helpers():
    assert Settings(_env_file=None, environment="Production").is_production()
    assert Settings(_env_file=None, environment="testing").is_testing()
    assert Settings(_env_file=None, environment="development").is_development()


def test_truncate_prompt():
    assert truncate_prompt("short") == "short"
    assert truncate_prompt("a" * 100) == "a" * 100
    assert truncate_prompt("a" * 101) == "a" * 100 + "..."
