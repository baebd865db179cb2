"""Interactive installer that deploys OpenClaw to Targon."""

__version__ = "0.1.0"
