"""Sub-routers HTTP por feature (social / collections)."""
