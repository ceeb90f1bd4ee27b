"""
Locks por ámbito para serializar recálculos dentro del proceso.

Solo coordinan tareas del mismo event loop; con varios procesos del
servidor cada uno tiene sus propios locks.
"""

import asyncio
from typing import Hashable


class ScopeLocks:
    """
    Un asyncio.Lock por clave (p. ej. la temporada), creado bajo demanda.

    Los locks no se eliminan nunca: hay uno por temporada recalculada
    durante la vida del proceso. Consultar is_locked no crea ninguno.
    """

    def __init__(self):
        self._locks: dict[Hashable, asyncio.Lock] = {}

    def for_scope(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def is_locked(self, key: Hashable) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()


# Compartido por todas las instancias de ScoreService del proceso
season_locks = ScopeLocks()
