"""API HTTP versionada."""
