"""Root conftest — shared test configuration."""

import os

# Ensure tests never talk to a real KV store or write into the repo
os.environ["KV_REST_API_URL"] = ""
os.environ["KV_REST_API_TOKEN"] = ""
os.environ["VERCEL"] = "false"
os.environ.setdefault("LOG_FORMAT", "text")
