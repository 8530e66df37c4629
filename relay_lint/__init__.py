"""relay-lint: detect unused GraphQL fields and fragment spreads in Relay code."""

__version__ = "0.1.0"
