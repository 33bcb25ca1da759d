"""Astronomical reference formulae used by the standard data providers."""
