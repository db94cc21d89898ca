"""Presentation layer: public API, command line, pytest plugin."""
