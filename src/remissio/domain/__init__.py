"""
domain - Entities, value objects, exceptions and ports.

No I/O beyond reading the bundled PUCAI table; no infrastructure imports.
"""
