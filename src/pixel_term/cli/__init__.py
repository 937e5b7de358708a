"""Command line interface and terminal front end."""
