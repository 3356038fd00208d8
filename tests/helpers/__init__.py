"""Test helpers for Ballotbox."""
