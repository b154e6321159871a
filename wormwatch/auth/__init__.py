"""Admin secret gate."""
