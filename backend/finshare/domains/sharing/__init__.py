"""Sharing domain: who may see and edit another user's financial records."""
