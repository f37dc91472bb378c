"""Conversational agent with read access to GitHub repositories."""
