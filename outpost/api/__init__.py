"""HTTP API: application factory, routes, dependencies."""
