"""Test fixtures for the BlockCast resolution engine."""
