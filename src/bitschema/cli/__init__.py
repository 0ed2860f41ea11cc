"""Command-line tools for bitschema."""
