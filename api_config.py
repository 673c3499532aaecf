# api_config.py - environment driven settings for the api engine
import os

# Prefix for relative endpoints; empty means every url must be absolute
API_BASE_URL = os.environ.get("API_BASE_URL", "")

# seconds, passed straight to requests
API_TIMEOUT = float(os.environ.get("API_TIMEOUT", "30"))

# Bearer token sent when a request asks for one
API_TOKEN = os.environ.get("API_TOKEN", "")

# Host resolved before each request; set to "" to skip the probe
API_REACHABILITY_HOST = os.environ.get("API_REACHABILITY_HOST", "example.com")

API_LOG_LEVEL = os.environ.get("API_LOG_LEVEL", "INFO")
