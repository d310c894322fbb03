"""
infrastructure - Concrete implementations of domain ports.

Contains the configuration loader, the key-value store backends and the
storage shims built on them. Depends on domain/ only.
"""
