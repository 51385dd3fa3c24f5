"""Application ports: record store and boundary collaborators."""

from medialib.application.interfaces.repositories import IRecordStore, IRecordTable
from medialib.application.interfaces.services import IFaultInjector

__all__ = ["IFaultInjector", "IRecordStore", "IRecordTable"]
