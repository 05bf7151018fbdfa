"""Admin portal: request context resolution (locale and session gating)."""
