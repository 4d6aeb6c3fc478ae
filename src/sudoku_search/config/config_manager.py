"""Hydra-backed configuration for the solver, search engine and I/O."""

import logging
from typing import Any, Dict, List, Optional, Union
from pathlib import Path
from omegaconf import DictConfig, OmegaConf, open_dict
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra

from sudoku_search.search.solver import SearchConfig
from .validators import validate_config

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = 'sudoku_search'
NOT_LOADED = "No configuration loaded. Call load_config() first."

# Most recently loaded configuration
_global_config: Optional[DictConfig] = None


def default_config_dir() -> Path:
    """The ``conf`` directory at the project root."""
    return Path(__file__).parent.parent.parent.parent / "conf"


class ConfigManager:
    """Composes ``conf/<name>.yaml`` with Hydra overrides and validates it.

    Overrides use Hydra's dotted syntax, so the search can be tuned from the
    command line without editing the YAML::

        manager = ConfigManager()
        cfg = manager.load_config(overrides=["search.astar.heuristic=manhattan",
                                             "search.edge_cost.mode=random"])
        solver = SudokuSolver(grid, config=manager.search_config())
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Directory holding the YAML files (project ``conf`` if None)

        Raises:
            FileNotFoundError: If the directory doesn't exist
        """
        self.config_dir = Path(config_dir or default_config_dir()).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.exists():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

        logger.debug(f"Using configuration directory {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Compose and (optionally) validate a configuration.

        Args:
            config_name: Name of the main config file (without .yaml)
            overrides: Hydra overrides, e.g. ``search.iddfs.max_depth=20``
            validate: Whether to run the validators

        Returns:
            The composed configuration, also installed as the global one

        Raises:
            ConfigValidationError: If validation is on and the result is invalid
        """
        global _global_config
        overrides = list(overrides or [])

        # Hydra refuses to initialize twice in one process
        GlobalHydra.instance().clear()

        try:
            with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
                cfg = compose(config_name=config_name, overrides=overrides)
        except Exception as e:
            logger.error(f"Failed to compose configuration '{config_name}': {e}")
            raise

        if validate:
            try:
                validate_config(cfg)
            except Exception as e:
                logger.error(f"Configuration '{config_name}' is invalid: {e}")
                raise

        self.config = cfg
        _global_config = cfg

        logger.info(f"Configuration loaded: {config_name}"
                    + (f" (overrides: {', '.join(overrides)})" if overrides else ""))
        return cfg

    def get_config(self) -> Optional[DictConfig]:
        return self.config

    def _require_config(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError(NOT_LOADED)
        return self.config

    def search_config(self) -> SearchConfig:
        """Engine parameters from the ``search`` section."""
        return SearchConfig.from_config(self._require_config())

    def apply_log_level(self, logger_name: str = PACKAGE_LOGGER) -> int:
        """Set the package logger to ``solver.log_level``.

        Returns:
            The numeric level applied
        """
        name = str(self.get_parameter('solver.log_level', 'WARNING')).upper()
        level = logging.getLevelName(name)
        logging.getLogger(logger_name).setLevel(level)
        return level

    def update_config(self, updates: Dict[str, Any]) -> None:
        """Apply several dotted-key updates, creating keys as needed."""
        config = self._require_config()

        with open_dict(config):
            for key, value in updates.items():
                OmegaConf.update(config, key, value)

        logger.info(f"Configuration updated with: {updates}")

    def set_parameter(self, key: str, value: Any) -> None:
        self.update_config({key: value})

    def get_parameter(self, key: str, default: Any = None) -> Any:
        """Get a parameter by dotted key, e.g. ``search.astar.heuristic``.

        Args:
            key: Dotted parameter key
            default: Value returned when the key is absent

        Returns:
            Parameter value or default
        """
        return OmegaConf.select(self._require_config(), key, default=default)

    def save_config(self, output_path: Union[str, Path]) -> None:
        """Save current configuration to a YAML file."""
        config = self._require_config()

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        OmegaConf.save(config, output_path)

        logger.info(f"Configuration saved to: {output_path}")

    def to_yaml(self, resolve: bool = True) -> str:
        if self.config is None:
            return "No configuration loaded."
        return OmegaConf.to_yaml(self.config, resolve=resolve)


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load a configuration and install it as the global one.

    Args:
        config_name: Name of the main config file
        overrides: Hydra overrides
        config_dir: Configuration directory (project ``conf`` if None)
        validate: Whether to run the validators

    Returns:
        Loaded configuration
    """
    return ConfigManager(config_dir).load_config(config_name, overrides, validate)


def get_config() -> Optional[DictConfig]:
    """Get the global configuration, or None if nothing was loaded."""
    return _global_config


def get_parameter(key: str, default: Any = None) -> Any:
    """Dotted-key lookup in the global configuration."""
    if _global_config is None:
        logger.warning("No global configuration loaded")
        return default
    return OmegaConf.select(_global_config, key, default=default)


class ConfigContext:
    """Temporarily override global parameters.

    Keys are dotted, so they go in through a dict::

        with ConfigContext(**{"search.edge_cost.mode": "random"}):
            ...
    """

    def __init__(self, **overrides):
        self.overrides = overrides
        self.config = get_config()
        self._saved: Dict[str, Any] = {}

    def __enter__(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No global configuration loaded")

        self._saved = {key: OmegaConf.select(self.config, key) for key in self.overrides}
        with open_dict(self.config):
            for key, value in self.overrides.items():
                OmegaConf.update(self.config, key, value)

        return self.config

    def __exit__(self, exc_type, exc_val, exc_tb):
        with open_dict(self.config):
            for key, value in self._saved.items():
                OmegaConf.update(self.config, key, value)
