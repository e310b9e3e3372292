"""Load user-visible notice texts from YAML."""

import os
from pathlib import Path

import yaml


def get_messages_path() -> Path:
    """Return path to the messages YAML (CONTACTBOOK_MESSAGES_PATH env or flows/messages.yaml)."""
    default = Path(__file__).resolve().parent / "flows" / "messages.yaml"
    path = os.environ.get("CONTACTBOOK_MESSAGES_PATH", "").strip()
    if path:
        return Path(path).resolve()
    return default


def load_messages(path: Path | None = None) -> dict[str, str]:
    """Load and validate the messages file. Returns notice id -> text."""
    if path is None:
        path = get_messages_path()
    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw)
    if not isinstance(data, dict):
        raise ValueError("Messages YAML must be a dict")
    messages = data.get("messages")
    if not isinstance(messages, dict) or not messages:
        raise ValueError("Messages YAML must have a non-empty 'messages' mapping")
    for key, value in messages.items():
        if not isinstance(value, str):
            raise ValueError(f"Message '{key}' must be a string")
    return dict(messages)


_messages_cache: dict[str, str] | None = None


def get_messages(cache: bool = True) -> dict[str, str]:
    """Load messages (cached by default). Pass cache=False to reload."""
    global _messages_cache
    if cache and _messages_cache is not None:
        return _messages_cache
    _messages_cache = load_messages()
    return _messages_cache


def notice_text(notice: str) -> str:
    """Text for a notice id; the id itself when the file has no entry for it."""
    return get_messages().get(notice) or notice
