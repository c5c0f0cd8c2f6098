"""Domain services - pure state transitions, no I/O."""
