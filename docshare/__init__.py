"""Shareable estimate, invoice and booking links with a stateless viewer."""
