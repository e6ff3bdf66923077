# investcalc/config.py
# Environment-aware settings for the calculator API

import os
from typing import Literal

from dotenv import load_dotenv

load_dotenv()

ENV: Literal["dev", "staging", "prod"] = os.environ.get("ENV", "dev")  # type: ignore
IS_DEV = (ENV == "dev")
IS_PROD = (ENV == "prod")

# Print "[timing]" lines per request
TIMING_LOGS = os.environ.get("TIMING_LOGS", "true").lower() == "true"

CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:5500",
    "http://127.0.0.1:5500",
]

_extra_origins = os.environ.get("CORS_ORIGINS", "")
if _extra_origins:
    CORS_ORIGINS.extend(o.strip() for o in _extra_origins.split(",") if o.strip())
