"""Pytest configuration shared by every test package.

Puts ``backend/`` on the import path so tests import the service as ``app.…``
without installing it, and clears environment variables that would switch the
default services.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path for imports
backend_path = Path(__file__).parent / "backend"
sys.path.insert(0, str(backend_path))

# Settings default to synthetic quotes and log-only notifications
for _name in ("APP_ENV", "QUOTE_SOURCE", "VAPID_PUBLIC_KEY", "VAPID_PRIVATE_KEY"):
    os.environ.pop(_name, None)
