"""Capa application: casos de uso sin dependencias de framework."""
