"""Global constants for the L0 orchestrator."""

import os
from pathlib import Path

# Directory paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
BUNDLED_PLUGINS_DIR = PROJECT_ROOT / "plugins" / "bundled"
LOG_DIR = PROJECT_ROOT / "log"

# Load the memory-services plugin in the HTTP service and CLI
ENABLE_MEMORY_PLUGIN = os.getenv("L0_ENABLE_MEMORY", "false").lower() in ("1", "true", "yes", "on")

# Extra plugin directories (colon-separated)
PLUGIN_PATHS = [Path(p.strip()) for p in os.getenv("PLUGIN_PATHS", "").split(":") if p.strip()]

# Prefix for dashboard links rendered by the CLI
DASHBOARD_BASE_URL = os.getenv("DASHBOARD_BASE_URL", "https://dashboard.vortexai.com")
