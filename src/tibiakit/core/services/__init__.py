"""Services that sequence I/O and extraction."""
