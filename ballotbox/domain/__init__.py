"""Domain layer for Ballotbox: entities, errors and event payloads."""
