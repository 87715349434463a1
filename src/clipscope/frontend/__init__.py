"""Textual frontend for browsing clipboard history."""
