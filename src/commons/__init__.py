"""Commons package - shared utilities and base classes."""
