from __future__ import annotations


def truncate_text(text: str, max_length: int = 80) -> str:
    return text[:max_length] + "..." if len(text) > max_length else text


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]
