"""Solvers and forecast models."""
