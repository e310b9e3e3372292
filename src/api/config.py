"""Settings read from the environment, optionally from a .env at repo root or cwd."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parent.parent.parent

BACKENDS = ("sqlite", "memory", "neo4j")


def load_env() -> None:
    """Load .env from repo root, else from the current directory."""
    for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
        if path.exists():
            load_dotenv(path)
            break


@dataclass(frozen=True)
class Settings:
    backend: str = "sqlite"
    db_path: Path = Path("data") / "contacts.db"
    image_dir: Path = Path("data") / "images"
    phone_region: str | None = None
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    owner_id: str = "default"

    @classmethod
    def from_env(cls) -> "Settings":
        backend = os.environ.get("CONTACTS_BACKEND", "sqlite").strip().lower() or "sqlite"
        if backend not in BACKENDS:
            raise ValueError(
                f"CONTACTS_BACKEND must be one of {', '.join(BACKENDS)}, got '{backend}'"
            )
        db_path = os.environ.get("CONTACTS_DB_PATH", "").strip()
        image_dir = os.environ.get("CONTACTS_IMAGE_DIR", "").strip()
        return cls(
            backend=backend,
            db_path=Path(db_path) if db_path else cls.db_path,
            image_dir=Path(image_dir) if image_dir else cls.image_dir,
            phone_region=os.environ.get("CONTACTS_PHONE_REGION", "").strip().upper() or None,
            neo4j_uri=os.environ.get("NEO4J_URI", cls.neo4j_uri).strip(),
            neo4j_user=os.environ.get("NEO4J_USER", cls.neo4j_user).strip(),
            neo4j_password=os.environ.get("NEO4J_PASSWORD", cls.neo4j_password).strip(),
            owner_id=os.environ.get("CONTACTS_OWNER_ID", cls.owner_id).strip() or cls.owner_id,
        )
