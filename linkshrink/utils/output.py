"""Output formatting utilities for consistent CLI reporting."""

import click


def section_header(text: str) -> str:
    """Format a section header with color."""
    return click.style(f"▶ {text}", fg='cyan', bold=True)


def error(text: str, prefix: str = "✗") -> str:
    """Format an error message.

    Args:
        text: Message text
        prefix: Prefix character (default: ✗)

    Returns:
        Formatted error string
    """
    return f"{click.style(prefix, fg='red')} {text}"


def warning(text: str, prefix: str = "⚠") -> str:
    """Format a warning message."""
    return f"{click.style(prefix, fg='yellow')} {text}"


def info(text: str) -> str:
    """Format an info line."""
    return f"  {click.style('•', fg='blue')} {text}"


def key_value(label: str, value: object) -> str:
    return f"  {click.style('•', fg='blue')} {label}: {click.style(str(value), fg='yellow')}"


def redact(value: str | None) -> str:
    """Mask a secret, keeping only its presence visible."""
    if value is None:
        return "(not set)"
    if value == "":
        return "(empty)"
    return "*** redacted ***"


__all__ = ["section_header", "error", "warning", "info", "key_value", "redact"]
