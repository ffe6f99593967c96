from __future__ import annotations


def preview_text(text: object, *, limit: int = 160) -> str:
    """Return a single-line preview capped at ``limit`` characters.

    Non-string input (the relay trusts message shapes) is rendered with ``str``.
    """
    raw = text if isinstance(text, str) else str(text)
    compact = " ".join(raw.split())
    if len(compact) <= limit:
        return compact
    cutoff = max(limit - 3, 1)
    return f"{compact[:cutoff]}..."
