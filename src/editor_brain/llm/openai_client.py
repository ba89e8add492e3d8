import os
from dotenv import load_dotenv

# Load .env.local once at import
load_dotenv(dotenv_path=os.path.join(os.getcwd(), ".env.local"))

from openai import OpenAI

_client = None


def get_openai_client() -> OpenAI:
    global _client
    if _client is None:
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY missing (set it in .env.local)")
        _client = OpenAI(api_key=api_key)
    return _client


def choose_model(kind: str, default: str = "gpt-4o-mini") -> str:
    # kind in {"analysis"}
    if kind == "analysis":
        return os.getenv("ANALYSIS_OPENAI_MODEL", default)
    return default
