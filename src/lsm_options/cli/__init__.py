"""Command line interface for lsm-options."""
