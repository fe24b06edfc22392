"""Command-line client for the GitHub Actions REST API."""
