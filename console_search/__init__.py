"""Typeahead search for the explorer console."""
