from __future__ import annotations

import os
import tempfile
from pathlib import Path

from dotenv import load_dotenv

TEST_ROOT = Path(__file__).resolve().parent

# Load test/.env first so local overrides win, then force the isolated test setup
load_dotenv(TEST_ROOT / ".env", override=False)

# Settings are read once at import time, so these must be set before any
# classifieds module is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CLASSIFIEDS_AUTO_CREATE_TABLES"] = "false"
os.environ["CLASSIFIEDS_STORAGE_ROOT"] = tempfile.mkdtemp(prefix="classifieds-media-")
os.environ["CLASSIFIEDS_JWT_SECRET"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["CLASSIFIEDS_REQUIRE_EMAIL_VERIFICATION"] = "false"
os.environ["CLASSIFIEDS_ENABLE_FILE_LOGGING"] = "false"
os.environ["CLASSIFIEDS_SITE_URL"] = "https://annonces.example.fr"
os.environ["LOGFIRE_ENABLED"] = "false"
