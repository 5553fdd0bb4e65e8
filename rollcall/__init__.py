"""Rollcall: QR-driven daily attendance check-in."""
