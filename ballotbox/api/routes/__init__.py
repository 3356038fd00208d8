"""API routes for Ballotbox."""
