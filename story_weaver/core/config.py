import os
from dotenv import load_dotenv

from story_weaver.core.errors import ConfigurationError

# Load variables from .env file
load_dotenv()


class Settings:
    PROJECT_NAME: str = "Story Weaver"
    VERSION: str = "1.0.0"

    # AI Keys
    GROQ_API_KEY: str = os.getenv("GROQ_API_KEY")
    GROQ_MODEL: str = os.getenv("GROQ_MODEL", "openai/gpt-oss-120b")

    # Generation tuning
    OUTLINE_TEMPERATURE: float = float(os.getenv("OUTLINE_TEMPERATURE", "0.7"))
    CHAPTER_TEMPERATURE: float = float(os.getenv("CHAPTER_TEMPERATURE", "0.8"))
    CHAPTER_MAX_TOKENS: int = int(os.getenv("CHAPTER_MAX_TOKENS", "4096"))

    # Characters of each previous chapter fed back as continuity context
    DIGEST_CHARS: int = int(os.getenv("DIGEST_CHARS", "200"))

    # UI language (see core/i18n.py)
    LANGUAGE: str = os.getenv("LANGUAGE", "en")

    def require_api_key(self) -> str:
        """Return the Groq key or fail startup when it is missing."""
        key = (self.GROQ_API_KEY or "").strip()
        if not key:
            raise ConfigurationError("GROQ_API_KEY environment variable not set")
        return key


settings = Settings()
