"""Configuration validation for the Sudoku search engine."""

import logging
from omegaconf import DictConfig

from sudoku_search.core.constants import GRID_SIZE, Algorithm
from sudoku_search.search.heuristics import HEURISTICS
from sudoku_search.search.solver import EDGE_COST_MODES

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
VALID_HEURISTICS = tuple(HEURISTICS)
VALID_EDGE_COST_MODES = EDGE_COST_MODES


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_solver_config(config.get('solver', {}))
        validate_search_config(config.get('search', {}))
        validate_io_config(config.get('io', {}))

        logger.debug("Configuration validation passed")

    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def validate_solver_config(solver_config: DictConfig) -> None:
    """Validate solver configuration section."""
    if not solver_config:
        return

    algorithm = solver_config.get('algorithm', 'A')
    try:
        Algorithm.from_code(algorithm)
    except ValueError as e:
        raise ConfigValidationError(f"solver.algorithm: {e}")

    grid_size = solver_config.get('grid_size', GRID_SIZE)
    if grid_size != GRID_SIZE:
        raise ConfigValidationError(
            f"grid_size must be {GRID_SIZE}, got {grid_size}"
        )

    log_level = str(solver_config.get('log_level', 'WARNING')).upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ConfigValidationError(
            f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, got {log_level}"
        )


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    iddfs_config = search_config.get('iddfs', {})
    if iddfs_config:
        max_depth = iddfs_config.get('max_depth', None)
        if max_depth is not None and (not isinstance(max_depth, int) or max_depth < 0):
            raise ConfigValidationError(
                f"iddfs.max_depth must be a non-negative integer or null, got {max_depth}"
            )

    for section in ('astar', 'greedy'):
        section_config = search_config.get(section, {})
        if section_config:
            heuristic = section_config.get('heuristic', None)
            if heuristic is not None and str(heuristic).lower() not in VALID_HEURISTICS:
                raise ConfigValidationError(
                    f"{section}.heuristic must be one of {', '.join(VALID_HEURISTICS)}, "
                    f"got {heuristic}"
                )

    heuristics_config = search_config.get('heuristics', {})
    if heuristics_config:
        p = heuristics_config.get('minkowski_p', 3.0)
        if not isinstance(p, (int, float)) or p <= 0:
            raise ConfigValidationError(
                f"heuristics.minkowski_p must be positive number, got {p}"
            )

    edge_config = search_config.get('edge_cost', {})
    if edge_config:
        mode = edge_config.get('mode', 'unit')
        if mode not in VALID_EDGE_COST_MODES:
            raise ConfigValidationError(
                f"edge_cost.mode must be one of {', '.join(VALID_EDGE_COST_MODES)}, got {mode}"
            )

        seed = edge_config.get('seed', None)
        if seed is not None and not isinstance(seed, int):
            raise ConfigValidationError(
                f"edge_cost.seed must be integer or null, got {seed}"
            )


def validate_io_config(io_config: DictConfig) -> None:
    if not io_config:
        return

    benchmark_config = io_config.get('benchmark', {})
    if benchmark_config:
        data_dir = benchmark_config.get('data_dir', 'data')
        if not isinstance(data_dir, str) or not data_dir:
            raise ConfigValidationError(
                f"benchmark.data_dir must be a non-empty path, got {data_dir}"
            )

