"""Routing: path templates, route groups, matching and URL generation.

Routes compile lazily to anchored, case-insensitive patterns. The
router walks the route tree in priority order and returns the first
route accepting a request.
"""
