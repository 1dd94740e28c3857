import os
from dotenv import load_dotenv

# Values already in the environment win over the .env file.
load_dotenv()

# --- RIOT API ---
# Only the proxy reads the token; resolvers talk to the proxy.
RIOT_API_TOKEN = os.getenv("RIOT_API_TOKEN")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "15"))

# --- PROXY ---
PROXY_BASE_URL = os.getenv("PROXY_BASE_URL", "http://localhost:8000")
PROXY_PATH = "/api/riot"

# --- MATCH LOOKUPS ---
MATCH_PAGE_SIZE = 20
ARENA_QUEUE_ID = 1700  # Arena
DEFAULT_REGION = "americas"

# --- REDIS ---
# Redis is the key-value store behind storage.py
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))

# --- LOGGING ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
