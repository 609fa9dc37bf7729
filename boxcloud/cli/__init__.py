"""boxcloud command line interface."""
