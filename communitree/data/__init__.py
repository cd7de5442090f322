"""Actions, reducer, store and persistence."""
