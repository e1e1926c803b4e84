"""Data models shared by the address tables, the resolution engine and the CLI."""
