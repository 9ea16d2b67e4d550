"""Replays a CSV transaction log into client account balances."""
