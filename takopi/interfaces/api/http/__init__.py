"""Router v1, sub-routers y schemas."""
