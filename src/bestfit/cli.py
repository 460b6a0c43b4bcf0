"""
Interfaz de línea de comandos para el simulador Best-Fit.

Este módulo ofrece la interfaz CLI: carga de particiones, menú interactivo,
ejecución de lotes de operaciones desde CSV y visualización del estado.
"""

import argparse
import sys
from .config import SimulationConfig, parse_sizes
from .io import pretty_print_status, read_operations_csv, read_partition_sizes_csv
from .models import BestFitError, JobNotFound
from .simulator import BestFitSimulator

MENU = """
========== BEST FIT MENU ==========
1. Add Job
2. Deallocate Job
3. Show Status
4. Exit"""


def create_parser():
    """
    Crea el parser de argumentos de la línea de comandos.

    Returns:
        argparse.ArgumentParser: Parser configurado.
    """
    parser = argparse.ArgumentParser(
        description="Simulador de particiones fijas con asignación Best-Fit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ejemplos:
  python -m bestfit --partitions 100,50,30
  python -m bestfit --partitions-csv data/partitions.csv --operations data/ops.csv
        """
    )

    sizes = parser.add_mutually_exclusive_group()
    sizes.add_argument(
        "--partitions",
        help="Tamaños de las particiones separados por comas (ej. 100,50,30)"
    )
    sizes.add_argument(
        "--partitions-csv",
        help="Ruta a un CSV con columna 'size' para las particiones"
    )

    parser.add_argument(
        "--operations",
        help="Ruta a un CSV con columnas op,value para ejecutar en lote"
    )

    parser.add_argument(
        "--log-level",
        choices=["INFO", "DEBUG"],
        default="INFO",
        help="Nivel de log: INFO (básico) o DEBUG (detallado)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Valida las invariantes tras cada operación"
    )

    return parser


def prompt_positive_int(message, input_fn=input):
    """
    Pide un entero positivo hasta que el usuario ingrese uno válido.

    Args:
        message: Texto del prompt.
        input_fn: Función de lectura (por defecto `input`).

    Returns:
        int: Valor ingresado, mayor que cero.
    """
    while True:
        raw = input_fn(message)
        try:
            value = int(raw.strip())
        except ValueError:
            value = 0
        if value > 0:
            return value
        print("Invalid size. Try again.")


def prompt_partition_sizes(input_fn=input):
    """Pide la cantidad de particiones y el tamaño de cada una."""
    while True:
        raw = input_fn("Enter number of partitions: ")
        try:
            count = int(raw.strip())
        except ValueError:
            count = -1
        if count >= 0:
            break
        print("Invalid number. Try again.")

    return [prompt_positive_int(f"Enter size of Partition {i}: ", input_fn) for i in range(1, count + 1)]


def print_new_events(simulator, start):
    """Imprime los eventos de la bitácora a partir del índice `start`."""
    for message in simulator.event_log[start:]:
        print(f"\n{message}")


def add_job(simulator, job_size):
    start = len(simulator.event_log)
    job_number = simulator.submit_job(job_size)
    print_new_events(simulator, start)
    return job_number


def deallocate_job(simulator, job_number):
    start = len(simulator.event_log)
    try:
        simulator.deallocate(job_number)
    except JobNotFound:
        print("\nJob not found.")
        return False
    print_new_events(simulator, start)
    return True


def show_status(simulator):
    print(pretty_print_status(simulator.snapshot()))


def run_operations(simulator, operations):
    """
    Ejecuta un lote de operaciones en orden.

    Args:
        simulator: Simulador sobre el que se aplican las operaciones.
        operations: Lista de tuplas (op, value) leídas del CSV.
    """
    for op, value in operations:
        if op == "alloc":
            try:
                add_job(simulator, value)
            except BestFitError as e:
                print(f"Error: {e}", file=sys.stderr)
        elif op == "dealloc":
            deallocate_job(simulator, value)
        elif op == "status":
            show_status(simulator)


def run_menu(simulator, input_fn=input):
    """
    Bucle del menú interactivo hasta que el usuario elige salir.

    Args:
        simulator: Simulador sobre el que se aplican las operaciones.
        input_fn: Función de lectura (por defecto `input`).
    """
    while True:
        print(MENU)
        choice = input_fn("Choose: ").strip()

        if choice == "1":
            add_job(simulator, prompt_positive_int("Enter job size: ", input_fn))
        elif choice == "2":
            try:
                job_number = int(input_fn("Enter job number to deallocate: ").strip())
            except ValueError:
                print("\nJob not found.")
                continue
            deallocate_job(simulator, job_number)
        elif choice == "3":
            show_status(simulator)
        elif choice == "4":
            break


def build_config(args, input_fn=input):
    """
    Construye la configuración a partir de los argumentos.

    Si no se indicaron particiones se piden de forma interactiva.
    """
    if args.partitions is not None:
        sizes = parse_sizes(args.partitions)
    elif args.partitions_csv is not None:
        sizes = read_partition_sizes_csv(args.partitions_csv)
    else:
        sizes = prompt_partition_sizes(input_fn)

    return SimulationConfig(partition_sizes=sizes, log_level=args.log_level, debug=args.debug)


def main(argv=None):
    """
    Punto de entrada principal de la aplicación CLI.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
        simulator = BestFitSimulator.from_config(config)

        if args.operations:
            run_operations(simulator, read_operations_csv(args.operations))
            show_status(simulator)
        else:
            run_menu(simulator)

        return 0

    except EOFError:
        return 0
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
