"""HTTP API for Tally Stage."""
