"""JSON-backed video catalogue with threaded comments."""
