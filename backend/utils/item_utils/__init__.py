# Item utilities package

from .models import Item, ItemStatus
from .store import ItemStore

__all__ = ['Item', 'ItemStatus', 'ItemStore']
