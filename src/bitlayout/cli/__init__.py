"""Command-line tools for bitlayout."""
