"""
application - Use cases built on the storage shims.

Services receive a StorageContext explicitly and return domain entities,
raising DomainError subclasses when a shim reports an error.
"""
