"""Pydantic domain models for teams, hosts, seasons and games."""
