"""
Parámetros de configuración de la simulación.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class SimulationConfig:
    """
    Configuración de una ejecución del simulador.

    Attributes:
        partition_sizes: Tamaños de las particiones, en orden.
        log_level: Nivel de bitácora ("INFO" o "DEBUG").
        debug: Activa la validación de invariantes tras cada operación.
    """
    partition_sizes: List[int] = field(default_factory=list)
    log_level: str = "INFO"
    debug: bool = False


def parse_sizes(text: str) -> List[int]:
    """
    Convierte una lista separada por comas en tamaños enteros.

    Args:
        text: Texto como "100,50,30".

    Returns:
        List[int]: Tamaños en el orden dado.

    Raises:
        ValueError: Si algún elemento no es un entero.
    """
    sizes = []
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            sizes.append(int(item))
        except ValueError:
            raise ValueError(f"Invalid partition size value: {item!r}")
    return sizes
