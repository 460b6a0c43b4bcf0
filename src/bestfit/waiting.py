"""
Cola de espera para trabajos que no encontraron partición.

Los trabajos se guardan en orden de llegada (FIFO) en un `collections.deque`.
Tras cada liberación la cola se recorre una sola vez, en orden, intentando
colocar cada trabajo; los que siguen sin caber conservan su orden relativo.
"""

from collections import deque
from typing import Callable, Iterator, List, Optional, Tuple
from .models import Job


class WaitingQueue:
    """Cola FIFO de trabajos pendientes de asignación."""

    def __init__(self):
        self._jobs: deque = deque()

    def enqueue(self, job: Job) -> None:
        """
        Añade un trabajo al final de la cola.

        Args:
            job: Trabajo que no pudo ser asignado.
        """
        self._jobs.append(job)

    def retry(self, place: Callable[[Job], Optional[int]]) -> List[Tuple[int, int]]:
        """
        Recorre la cola una vez intentando colocar cada trabajo.

        Args:
            place: Intenta asignar el trabajo; devuelve el id de la partición
                o None si no cupo.

        Returns:
            Pares (job_number, partition_id) de los trabajos colocados.
        """
        placed = []

        # Se rota la cola exactamente una vez; los que no caben vuelven al final.
        pending = len(self._jobs)
        for _ in range(pending):
            job = self._jobs.popleft()
            partition_id = place(job)
            if partition_id is None:
                self._jobs.append(job)
            else:
                placed.append((job.job_number, partition_id))

        return placed

    def __contains__(self, job_number: int) -> bool:
        return any(job.job_number == job_number for job in self._jobs)

    def __iter__(self) -> Iterator[Job]:
        return iter(self._jobs)

    def __len__(self) -> int:
        return len(self._jobs)
