"""HTTP API for Ballotbox."""
