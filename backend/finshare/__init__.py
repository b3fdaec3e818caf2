"""Finshare backend: sharing-scoped visibility for personal finance records."""
