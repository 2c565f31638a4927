"""Crosscutting: config, logging, errores tipados y middleware HTTP."""
