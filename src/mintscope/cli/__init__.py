"""mintscope command-line interface."""
