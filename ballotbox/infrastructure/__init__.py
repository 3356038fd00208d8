"""Infrastructure layer for Ballotbox."""
