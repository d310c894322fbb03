"""
application.services - One service per feature, each built on a StorageContext.
"""
