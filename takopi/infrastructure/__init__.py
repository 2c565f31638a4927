"""Capa infrastructure: storage local, PostgreSQL y repositorios."""
