"""Nural eval gateway: mock evaluation endpoints, rewrites, proxy and console client."""
