"""REST endpoint functions. Internal; signatures may change at any time."""
