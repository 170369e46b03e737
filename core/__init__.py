"""Core application of the cafe discovery service."""
