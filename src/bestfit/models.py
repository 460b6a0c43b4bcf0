"""
Modelos de datos para la simulación de particiones fijas.

Este módulo define las estructuras de datos principales utilizadas en toda la
simulación: `Job`, `Partition` con su ocupación (`Free` u `Occupied`), los
resultados de las operaciones y la jerarquía de errores.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


class BestFitError(Exception):
    """Error base del simulador."""


class InvalidPartitionSize(BestFitError, ValueError):
    """Se intentó crear una partición con tamaño menor o igual a cero."""

    def __init__(self, size: int):
        super().__init__(f"Invalid partition size: {size} (must be > 0)")
        self.size = size


class InvalidJobSize(BestFitError, ValueError):
    """Se intentó enviar un trabajo con tamaño menor o igual a cero."""

    def __init__(self, size: int):
        super().__init__(f"Invalid job size: {size} (must be > 0)")
        self.size = size


class JobNotFound(BestFitError, LookupError):
    """No existe ninguna partición ocupada por el trabajo indicado."""

    def __init__(self, job_number: int):
        super().__init__(f"Job not found: {job_number}")
        self.job_number = job_number


@dataclass(frozen=True)
class Job:
    """
    Representa un trabajo que solicita memoria.

    Attributes:
        job_number: Identificador único, asignado de forma monótona desde 1.
        job_size: Cantidad de memoria requerida por el trabajo.
    """
    job_number: int
    job_size: int

    def to_row(self) -> dict:
        """Convierte el trabajo a un diccionario para la visualización."""
        return {'job_number': self.job_number, 'job_size': self.job_size}


@dataclass(frozen=True)
class Free:
    """Ocupación de una partición libre."""


@dataclass(frozen=True)
class Occupied:
    """Ocupación de una partición asignada a un trabajo."""
    job_number: int
    job_size: int


FREE = Free()

Occupancy = Union[Free, Occupied]


@dataclass
class Partition:
    """
    Representa una partición de memoria de tamaño fijo.

    Attributes:
        id: Identificador de la partición (1..N en orden de creación).
        size: Capacidad de la partición, fija durante toda su vida.
        occupancy: `FREE` o `Occupied(job_number, job_size)`.
    """
    id: int
    size: int
    occupancy: Occupancy = field(default=FREE)

    @property
    def is_free(self) -> bool:
        """True si la partición no contiene ningún trabajo."""
        return isinstance(self.occupancy, Free)

    @property
    def job_number(self) -> Optional[int]:
        """Número del trabajo asignado, o None si la partición está libre."""
        if self.is_free:
            return None
        return self.occupancy.job_number

    @property
    def job_size(self) -> Optional[int]:
        """Tamaño del trabajo asignado, o None si la partición está libre."""
        if self.is_free:
            return None
        return self.occupancy.job_size

    @property
    def internal_fragment(self) -> int:
        """
        Espacio desperdiciado dentro de la partición.

        Returns:
            int: `size - job_size` si está ocupada, 0 si está libre.
        """
        if self.is_free:
            return 0
        return self.size - self.occupancy.job_size

    def to_row(self) -> dict:
        """
        Convierte la partición a un diccionario para la tabla de estado.

        Returns:
            dict: Claves {id, size, free, job_number, job_size, internal_fragment}.
        """
        return {
            'id': self.id,
            'size': self.size,
            'free': self.is_free,
            'job_number': self.job_number,
            'job_size': self.job_size,
            'internal_fragment': self.internal_fragment,
        }


@dataclass(frozen=True)
class Allocated:
    """El trabajo fue colocado en la partición `partition_id`."""
    partition_id: int


@dataclass(frozen=True)
class NoFit:
    """Ninguna partición libre es lo bastante grande; el trabajo debe esperar."""


NO_FIT = NoFit()

AllocationResult = Union[Allocated, NoFit]


@dataclass(frozen=True)
class Deallocated:
    """
    Resultado de liberar un trabajo.

    Attributes:
        partition_id: Partición que quedó libre.
        job: Trabajo liberado, tal como se registró en el historial.
        placed: Pares (job_number, partition_id) colocados desde la cola de espera.
    """
    partition_id: int
    job: Job
    placed: Tuple[Tuple[int, int], ...] = ()
