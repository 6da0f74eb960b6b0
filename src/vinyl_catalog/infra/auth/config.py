from __future__ import annotations

import os


def api_tokens() -> dict[str, str]:
    """
    Parse API_TOKENS into a token -> subject mapping.

    Format: comma-separated ``subject:token`` pairs, e.g. ``alice:s3cret,ci:t0ken``.
    """
    raw = os.getenv("API_TOKENS")

    if not raw:
        raise RuntimeError("API_TOKENS environment variable is not set")

    tokens: dict[str, str] = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        subject, sep, token = entry.partition(":")
        if not sep or not subject.strip() or not token.strip():
            raise RuntimeError(f"API_TOKENS entry must look like 'subject:token', got {entry!r}")
        tokens[token.strip()] = subject.strip()

    if not tokens:
        raise RuntimeError("API_TOKENS environment variable has no entries")

    return tokens
