"""Earthquake risk classification tools."""
