from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
import firebase_admin
from firebase_admin import credentials, firestore

BASE_DIR = Path(__file__).resolve().parent
DEFAULT_KEY_FILE = "serviceAccountKey.json"

MISSING_CREDENTIALS_HELP = (
    "Get it from: Firebase Console → Project Settings → Service accounts → "
    "Generate new private key"
)

# ---------- Credentials ----------
def resolve_credentials_path(explicit: Optional[str] = None) -> Path:
    """
    Order: explicit path (--credentials), GOOGLE_APPLICATION_CREDENTIALS
    (from the environment or .env), then serviceAccountKey.json next to this file.
    Relative paths are taken from BASE_DIR.
    """
    load_dotenv()
    raw = (explicit or "").strip() or os.getenv("GOOGLE_APPLICATION_CREDENTIALS", "").strip()
    cred_path = Path(raw) if raw else Path(DEFAULT_KEY_FILE)
    if not cred_path.is_absolute():
        cred_path = (BASE_DIR / cred_path).resolve()
    return cred_path

def init_db(cred_path: Path) -> firestore.Client:
    if not cred_path.exists():
        raise FileNotFoundError(f"Missing credential file: {cred_path}")
    if not firebase_admin._apps:
        firebase_admin.initialize_app(credentials.Certificate(str(cred_path)))
    return firestore.client()
