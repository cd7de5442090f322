"""Pure domain rules and models."""
