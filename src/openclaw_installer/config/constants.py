"""Default endpoints, environment variable names, and constants."""

from __future__ import annotations

APP_NAME = "openclaw-targon"

# Environment variable names
ENV_DEPLOY_URL = "TARGON_DEPLOY_URL"
ENV_API_KEY = "TARGON_API_KEY"

# API defaults
DEFAULT_DEPLOY_URL = "https://api.targon.com/v1/deployments"
DASHBOARD_URL_TEMPLATE = "https://targon.com/rentals/{uid}"
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_TIMEOUT = 60.0

# Seconds to wait before the single status poll
STATUS_POLL_DELAY = 2.0

# Deployment target
OPENCLAW_IMAGE = "ghcr.io/manifold-inc/openclaw/openclaw:latest"
PORT_PROTOCOL = "TCP"
PORT_ROUTING_TYPE = "Proxy"
DEFAULT_GATEWAY_PORT = 18789
