"""Station catalog providers."""
