"""HTTP API — JSON access to network and station operations."""
