"""Command line tools for driveguard."""
