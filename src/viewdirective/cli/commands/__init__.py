"""Top-level viewdirective commands (auto-discovered)."""
