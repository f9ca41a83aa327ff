"""Crawler package: URL handling, fetching, reachability checks and the BFS site crawler."""
