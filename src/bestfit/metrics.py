"""
Métricas derivadas del estado de la tabla de particiones.

Todas las funciones se calculan bajo demanda a partir de las particiones; no
se guarda ningún valor entre llamadas.
"""

from typing import Iterable
from .models import Partition


def total_internal_fragmentation(partitions: Iterable[Partition]) -> int:
    """
    Suma la fragmentación interna de las particiones ocupadas.

    Args:
        partitions: Particiones de la tabla.

    Returns:
        int: Espacio total desperdiciado dentro de las particiones ocupadas.
    """
    return sum(p.internal_fragment for p in partitions if not p.is_free)


def average_internal_fragmentation(partitions: Iterable[Partition]) -> float:
    """
    Calcula la fragmentación interna promedio sobre las particiones ocupadas.

    Returns:
        float: Promedio, o 0.0 si no hay ninguna partición ocupada.
    """
    used = [p for p in partitions if not p.is_free]
    if not used:
        return 0.0
    return total_internal_fragmentation(used) / len(used)


def utilization(partitions: Iterable[Partition]) -> float:
    """
    Calcula el porcentaje de utilización de la memoria.

    Es el promedio sobre TODAS las particiones de `job_size / size * 100`;
    una partición libre aporta 0 al promedio, no se excluye.

    Returns:
        float: Utilización en porcentaje, o 0.0 si la tabla está vacía.
    """
    partitions = list(partitions)
    if not partitions:
        return 0.0

    total = 0.0
    for p in partitions:
        if not p.is_free:
            total += p.job_size / p.size * 100
    return total / len(partitions)
