"""Shared cross-cutting helpers (logging, SQL sanitization)."""
