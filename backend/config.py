# file: backend/config.py

import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


OPENAQ_API_KEY = os.getenv("OPENAQ_API_KEY")
OPENAQ_URL = os.getenv("OPENAQ_URL", "https://api.openaq.org/v3")

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-5")
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-ada-002")

PINECONE_API_KEY = os.getenv("PINECONE_API_KEY")
PINECONE_ENVIRONMENT = os.getenv("PINECONE_ENVIRONMENT")
PINECONE_INDEX = os.getenv("PINECONE_INDEX", "air-quality-patterns")

STORE_PATH = os.getenv("STORE_PATH", "airguard_store.json")
ALERT_LOCALE = os.getenv("ALERT_LOCALE", "en")
ENABLE_SCHEDULER = _flag("ENABLE_SCHEDULER")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

# Baseline readings are fixed to this date rather than measured live
DATA_DATE = "2025-10-05"
DATA_SOURCE = "NASA GIBS/Worldview + NOAA"
