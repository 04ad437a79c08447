"""Vidhub user backend: accounts, sessions and channel profiles."""
