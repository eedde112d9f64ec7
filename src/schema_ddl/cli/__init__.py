"""Command-line interface for SchemaDDL."""
