"""Discord glue for the flag translation bot."""
