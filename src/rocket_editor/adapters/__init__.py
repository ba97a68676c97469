"""Host adapters that drive a session from a concrete UI toolkit."""
