"""Bundled data files (PUCAI scoring table)."""
