"""Local configuration for pagemodel."""

from __future__ import annotations

import os


DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "pagemodel/0.1"
DEFAULT_STATIC_PATH = "static/"

PAGEMODEL_FETCH_TIMEOUT_S = float(os.getenv("PAGEMODEL_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
PAGEMODEL_FETCH_MAX_RETRIES = int(os.getenv("PAGEMODEL_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
PAGEMODEL_FETCH_BACKOFF_S = float(os.getenv("PAGEMODEL_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
PAGEMODEL_USER_AGENT = os.getenv("PAGEMODEL_USER_AGENT", DEFAULT_USER_AGENT)
# Shared assets folder served next to published sites, e.g. "static/"
PAGEMODEL_STATIC_PATH = os.getenv("PAGEMODEL_STATIC_PATH", DEFAULT_STATIC_PATH)
