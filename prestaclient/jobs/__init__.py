"""Command-line jobs built on the client."""
