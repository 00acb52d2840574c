"""Database package."""
from sprout.database.session import init_db, AsyncSessionLocal, dumps_json
from sprout.database.models import Base, Option
from sprout.database.options import get_option, update_option, delete_option

__all__ = [
    "init_db", "AsyncSessionLocal", "dumps_json",
    "Base", "Option",
    "get_option", "update_option", "delete_option",
]
