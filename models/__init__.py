"""
Creates the global DBStorage instance used by the API layer.
"""
from models.db_storage import DBStorage

storage = DBStorage()
storage.reload()
