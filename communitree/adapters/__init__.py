"""External service interfaces and their HTTP implementations."""
