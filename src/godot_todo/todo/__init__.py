"""Conversion task records and their GUID-keyed collection."""

from .item import ToDoItem, required_keys
from .todo_list import VERIFIED_INFO, ToDoList

__all__ = ["ToDoItem", "ToDoList", "VERIFIED_INFO", "required_keys"]
