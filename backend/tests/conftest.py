"""Root conftest — shared test configuration."""

import os

# Tests must not pick up a developer's auth or size policy from the shell
os.environ.setdefault("AUTH_MODE", "allow_all")
os.environ.setdefault("MAX_PAYLOAD_SIZE_BYTES", "10485760")
os.environ.setdefault("LOG_FORMAT", "text")
