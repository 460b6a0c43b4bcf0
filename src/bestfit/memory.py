"""
Operaciones y algoritmos de gestión de memoria.

Este módulo implementa la estrategia de asignación Best-Fit sobre un esquema
de particionamiento fijo, junto con la liberación de particiones y la
instantánea de la tabla para su visualización.
"""

from typing import Iterable, Iterator, List, Optional
from .models import FREE, InvalidPartitionSize, Job, Occupied, Partition


class PartitionTable:
    """
    Tabla de particiones fijas, construida una sola vez al inicio.

    Invariante: cada partición contiene 0 o 1 trabajo; un número de trabajo
    aparece en como mucho una partición. La tabla nunca crece ni se achica.
    """

    def __init__(self, sizes: Iterable[int]):
        """
        Crea las particiones con ids 1..N en el orden recibido.

        Args:
            sizes: Tamaños de las particiones, todos mayores que cero.

        Raises:
            InvalidPartitionSize: Si algún tamaño es menor o igual a cero.
        """
        sizes = list(sizes)
        for size in sizes:
            if size <= 0:
                raise InvalidPartitionSize(size)
        self._partitions = [Partition(id=i, size=size) for i, size in enumerate(sizes, start=1)]

    @property
    def partitions(self) -> List[Partition]:
        return self._partitions

    def __iter__(self) -> Iterator[Partition]:
        return iter(self._partitions)

    def __len__(self) -> int:
        return len(self._partitions)

    def get(self, partition_id: int) -> Partition:
        """Devuelve la partición con el id dado (ids 1..N)."""
        if not 1 <= partition_id <= len(self._partitions):
            raise KeyError(partition_id)
        return self._partitions[partition_id - 1]

    def best_fit(self, size: int) -> Optional[Partition]:
        """
        Encuentra la partición libre con el menor sobrante para el tamaño dado.

        Recorre las particiones en orden de id; ante un empate en el sobrante
        gana la primera encontrada.

        Args:
            size: Tamaño de memoria requerido por el trabajo.

        Returns:
            La partición elegida, o None si ninguna partición libre alcanza.
        """
        best: Optional[Partition] = None
        smallest_leftover = None

        for partition in self._partitions:
            if not partition.is_free or partition.size < size:
                continue
            leftover = partition.size - size
            if smallest_leftover is None or leftover < smallest_leftover:
                smallest_leftover = leftover
                best = partition

        return best

    def assign(self, partition: Partition, job: Job) -> None:
        """
        Asigna una partición libre a un trabajo.

        Args:
            partition: La partición a ocupar.
            job: Trabajo que ocupará la partición.
        """
        if not partition.is_free:
            raise ValueError(f"Partition {partition.id} is already occupied by job {partition.job_number}")
        if partition.size < job.job_size:
            raise ValueError(f"Job {job.job_number} ({job.job_size}) does not fit in partition {partition.id} ({partition.size})")
        partition.occupancy = Occupied(job.job_number, job.job_size)

    def find(self, job_number: int) -> Optional[Partition]:
        """Devuelve la primera partición ocupada por `job_number`, o None."""
        for partition in self._partitions:
            if not partition.is_free and partition.job_number == job_number:
                return partition
        return None

    def release(self, partition: Partition) -> Job:
        """
        Libera una partición ocupada.

        Args:
            partition: Partición a liberar.

        Returns:
            Job: El trabajo que ocupaba la partición.
        """
        if partition.is_free:
            raise ValueError(f"Partition {partition.id} is already free")
        job = Job(partition.job_number, partition.job_size)
        partition.occupancy = FREE
        return job

    def table_snapshot(self) -> List[dict]:
        """
        Genera una instantánea de la tabla de memoria para su visualización.

        Returns:
            Lista de diccionarios, uno por partición, con las claves
            {id, size, free, job_number, job_size, internal_fragment}.
        """
        return [partition.to_row() for partition in self._partitions]
