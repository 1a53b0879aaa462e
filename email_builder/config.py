"""Configuration — variables d'environnement + valeurs par défaut."""
import os
from pathlib import Path

DATA_DIR = Path(os.getenv("EMAIL_BUILDER_DATA_DIR", str(Path.cwd() / "data")))
DB_PATH  = os.getenv("EMAIL_BUILDER_DB_PATH", str(DATA_DIR / "email_builder.db"))

LOG_LEVEL = os.getenv("EMAIL_BUILDER_LOG_LEVEL", "INFO")

# Images de substitution quand un média n'a pas de source exploitable
PLACEHOLDER_URL = os.getenv("EMAIL_BUILDER_PLACEHOLDER_URL", "https://via.placeholder.com").rstrip("/")

# Probes médias (image / vidéo)
PROBE_TIMEOUT = float(os.getenv("EMAIL_BUILDER_PROBE_TIMEOUT", "5"))
NOEMBED_URL   = os.getenv("EMAIL_BUILDER_NOEMBED_URL", "https://noembed.com/embed")
