"""Cross-domain service helpers."""
