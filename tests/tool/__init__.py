"""Tests for the konf command line tool."""
