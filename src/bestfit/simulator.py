"""
Motor principal de la simulación y coordinación de componentes.

Este módulo reúne la tabla de particiones, la cola de espera y el historial de
trabajos liberados en un único objeto, `BestFitSimulator`, que expone las
operaciones de asignación, liberación y consulta de estado.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple
from .config import SimulationConfig
from .memory import PartitionTable
from .metrics import average_internal_fragmentation, total_internal_fragmentation, utilization
from .models import (
    NO_FIT, Allocated, AllocationResult, Deallocated, InvalidJobSize, Job, JobNotFound,
)
from .waiting import WaitingQueue


class BestFitSimulator:
    """
    Motor de la simulación de particiones fijas con política Best-Fit.

    Es dueño de todo el estado mutable: tabla de particiones, cola de espera,
    historial de trabajos liberados y contador de trabajos. Las operaciones se
    ejecutan de a una, sin concurrencia.
    """

    def __init__(self, sizes: Iterable[int] = (), modo_depuracion: bool = False, nivel_log: str = "INFO"):
        """
        Inicializa el simulador con las particiones indicadas.

        Args:
            sizes: Tamaños de las particiones, en orden (ids 1..N).
            modo_depuracion: Activa validaciones adicionales de invariantes.
            nivel_log: Nivel de bitácora ("INFO" o "DEBUG").
        """
        self.modo_depuracion = modo_depuracion
        self.event_log: List[str] = []
        self._next_job_number = 1

        # Configurar logger
        self.logger = logging.getLogger('bestfit')
        self.logger.setLevel(getattr(logging, nivel_log.upper()))

        # Crear un handler de consola si aún no existe
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

        self.initialize(sizes)

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "BestFitSimulator":
        """Crea un simulador a partir de un `SimulationConfig`."""
        return cls(config.partition_sizes, modo_depuracion=config.debug, nivel_log=config.log_level)

    def initialize(self, sizes: Iterable[int]) -> None:
        """
        Reinicia la tabla, la cola de espera y el historial.

        La numeración de trabajos continúa; un número nunca se reutiliza.

        Raises:
            InvalidPartitionSize: Si algún tamaño es menor o igual a cero.
        """
        self.table = PartitionTable(sizes)
        self.waiting = WaitingQueue()
        self.deallocated_jobs: List[Job] = []
        self.event_log = []
        self.logger.debug(f"Tabla inicializada con {len(self.table)} particiones: {[p.size for p in self.table]}")

    def new_job(self, job_size: int) -> Job:
        """
        Crea un trabajo con el siguiente número disponible.

        Raises:
            InvalidJobSize: Si el tamaño es menor o igual a cero.
        """
        if job_size <= 0:
            raise InvalidJobSize(job_size)
        job = Job(self._next_job_number, job_size)
        self._next_job_number += 1
        return job

    def submit_job(self, job_size: int) -> int:
        """
        Envía un trabajo nuevo: lo asigna o, si no cabe, lo pone en espera.

        Args:
            job_size: Memoria requerida por el trabajo.

        Returns:
            int: Número asignado al trabajo.
        """
        job = self.new_job(job_size)
        result = self.allocate(job)
        if isinstance(result, Allocated):
            self._record(f"Job {job.job_number} allocated to Partition {result.partition_id} (Best Fit).")
        else:
            self.waiting.enqueue(job)
            self._record(f"No available partition for Job {job.job_number} → Added to waiting queue.")
        self._validar_invariantes()
        return job.job_number

    def allocate(self, job: Job) -> AllocationResult:
        """
        Intenta colocar un trabajo con Best-Fit.

        No toca la cola de espera: ante `NoFit` el llamador decide qué hacer.

        Returns:
            `Allocated(partition_id)` o `NO_FIT`.

        Raises:
            InvalidJobSize: Si el tamaño es menor o igual a cero.
            ValueError: Si el trabajo ya ocupa una partición o está en espera.
        """
        if job.job_size <= 0:
            raise InvalidJobSize(job.job_size)
        if self.table.find(job.job_number) is not None or job.job_number in self.waiting:
            raise ValueError(f"Job {job.job_number} is already allocated or waiting")

        partition = self.table.best_fit(job.job_size)
        if partition is None:
            self.logger.debug(f"Trabajo {job.job_number} ({job.job_size}) sin partición disponible")
            return NO_FIT

        self.table.assign(partition, job)
        self.logger.debug(
            f"Trabajo {job.job_number} ({job.job_size}) asignado a la partición {partition.id} "
            f"(tamaño={partition.size}, sobrante={partition.internal_fragment})"
        )
        self._validar_invariantes()
        return Allocated(partition.id)

    def retry_waiting(self) -> List[Tuple[int, int]]:
        """
        Recorre la cola de espera una vez e intenta asignar cada trabajo.

        Las particiones ocupadas por un trabajo de la misma pasada ya no están
        disponibles para los siguientes.

        Returns:
            Pares (job_number, partition_id) de los trabajos colocados.
        """
        placed = self.waiting.retry(self._place)
        for job_number, partition_id in placed:
            self._record(f"Waiting Job {job_number} allocated to Partition {partition_id}.")
        return placed

    def _place(self, job: Job) -> Optional[int]:
        result = self.allocate(job)
        if isinstance(result, Allocated):
            return result.partition_id
        return None

    def deallocate(self, job_number: int) -> Deallocated:
        """
        Libera la partición ocupada por un trabajo y reintenta la cola de espera.

        Args:
            job_number: Número del trabajo a liberar.

        Returns:
            Deallocated: Partición liberada, trabajo registrado y trabajos
            colocados desde la cola de espera.

        Raises:
            JobNotFound: Si ninguna partición contiene ese trabajo. El estado
                no se modifica.
        """
        partition = self.table.find(job_number)
        if partition is None:
            self.logger.info(f"Trabajo {job_number} no encontrado en ninguna partición")
            raise JobNotFound(job_number)

        job = self.table.release(partition)
        self.deallocated_jobs.append(job)
        self._record(f"Job {job_number} deallocated from Partition {partition.id}")

        placed = self.retry_waiting()
        self._validar_invariantes()
        return Deallocated(partition.id, job, tuple(placed))

    def snapshot(self) -> Dict[str, object]:
        """
        Devuelve una vista de solo lectura del estado actual.

        Returns:
            dict: Claves {partitions, waiting_queue, deallocated_jobs,
            total_fragmentation, avg_fragmentation, utilization}.
        """
        partitions = self.table.partitions
        return {
            'partitions': self.table.table_snapshot(),
            'waiting_queue': [job.to_row() for job in self.waiting],
            'deallocated_jobs': [job.to_row() for job in self.deallocated_jobs],
            'total_fragmentation': total_internal_fragmentation(partitions),
            'avg_fragmentation': average_internal_fragmentation(partitions),
            'utilization': utilization(partitions),
        }

    def _record(self, message: str) -> None:
        """Guarda un evento en la bitácora de la ejecución."""
        self.event_log.append(message)
        self.logger.debug(message)

    def _validar_invariantes(self):
        """
        Valida las invariantes de la simulación en modo debug.

        Raises:
            AssertionError: Si alguna invariante es violada.
        """
        if not self.modo_depuracion:
            return

        # Invariante 1: tamaños positivos y trabajos que caben en su partición
        assigned = set()
        for partition in self.table:
            assert partition.size > 0, f"Partición {partition.id} con tamaño inválido: {partition.size}"
            if partition.is_free:
                continue
            assert 0 <= partition.job_size <= partition.size, f"Trabajo {partition.job_number} no cabe en la partición {partition.id}"

            # Invariante 2: no hay trabajos duplicados en particiones
            assert partition.job_number not in assigned, f"Trabajo {partition.job_number} duplicado en particiones"
            assigned.add(partition.job_number)

        # Invariante 3: ningún trabajo está a la vez en espera y en una partición
        for job in self.waiting:
            assert job.job_number not in assigned, f"Trabajo {job.job_number} en la cola de espera y en una partición"
