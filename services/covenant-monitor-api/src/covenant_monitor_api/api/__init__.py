"""HTTP layer: request parsing, responses and routers."""
