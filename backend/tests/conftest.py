import os
import sys
from pathlib import Path

# Ensure the `leadfinder` package is importable when running pytest from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# The server module reads settings at import time.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("RATE_LIMIT_MAX_REQUESTS", "1000")
