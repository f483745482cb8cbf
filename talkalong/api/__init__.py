"""HTTP API for the Talkalong controller."""
