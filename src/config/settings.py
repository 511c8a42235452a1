# Site and runtime configuration, read from the environment (.env supported)

import os

from dotenv import load_dotenv

load_dotenv()

# Site origin used for canonical URLs
SITE_BASE_URL = os.getenv("SITE_BASE_URL", "https://www.pkminfotech.com").rstrip("/")

# Absolute origins treated as internal links by the auditor
SITE_ORIGINS = tuple(
    origin.strip().rstrip("/")
    for origin in os.getenv(
        "SITE_ORIGINS",
        "https://www.pkminfotech.com,https://pkminfotech.com",
    ).split(",")
    if origin.strip()
)

MAX_REDIRECT_HOPS = int(os.getenv("MAX_REDIRECT_HOPS", "10"))

# Generic page suggested for links flagged as missing
FALLBACK_PAGE = os.getenv("FALLBACK_PAGE", "/latest")

CONTENT_DB_PATH = os.getenv("CONTENT_DB_PATH", "artifacts/content/site.db")
REPORT_DIR = os.getenv("REPORT_DIR", "artifacts/reports")

NOT_FOUND_LOG_CAPACITY = int(os.getenv("NOT_FOUND_LOG_CAPACITY", "500"))

WEB_HOST = os.getenv("WEB_HOST", "127.0.0.1")
WEB_PORT = int(os.getenv("WEB_PORT", "8080"))
