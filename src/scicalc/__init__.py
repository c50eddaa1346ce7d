"""Scientific calculator expression engine and HTTP surface."""
