"""Input/output adapters: filesystem, HTTP and row validation."""
