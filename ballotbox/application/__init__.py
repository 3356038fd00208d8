"""Application layer for Ballotbox."""
