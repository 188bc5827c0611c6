"""Command line tool for konf."""
