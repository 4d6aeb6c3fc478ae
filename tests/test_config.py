"""Tests for configuration management system."""

import logging
import pytest
import tempfile
import shutil
from pathlib import Path
from omegaconf import DictConfig, OmegaConf

from sudoku_search.config import (
    ConfigManager, ConfigContext, load_config, get_config, get_parameter,
    validate_config, ConfigValidationError, default_config_dir, PACKAGE_LOGGER
)
from sudoku_search.search.solver import SearchConfig


CONFIG_CONTENT = """
solver:
  algorithm: A
  grid_size: 9
  log_level: WARNING

search:
  iddfs:
    max_depth: null
  astar:
    heuristic: candidate_count
  greedy:
    heuristic: empty_cells
  heuristics:
    minkowski_p: 3.0
  edge_cost:
    mode: unit
    seed: 42

io:
  benchmark:
    data_dir: data
"""


@pytest.fixture
def temp_config_dir():
    """Create temporary configuration directory."""
    temp_dir = tempfile.mkdtemp()
    config_dir = Path(temp_dir) / "conf"
    config_dir.mkdir()

    with open(config_dir / "config.yaml", 'w') as f:
        f.write(CONFIG_CONTENT)

    yield config_dir

    shutil.rmtree(temp_dir)


class TestConfigManager:
    """Test ConfigManager functionality."""

    def test_config_manager_initialization(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        assert manager.config_dir == temp_config_dir.resolve()
        assert manager.config is None

    def test_missing_config_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "nowhere")

    def test_load_config_basic(self, temp_config_dir):
        """Test basic configuration loading."""
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config()

        assert isinstance(config, DictConfig)
        assert config.solver.algorithm == "A"
        assert config.search.iddfs.max_depth is None
        assert manager.get_config() is config

    def test_load_config_with_overrides(self, temp_config_dir):
        """Test configuration loading with overrides."""
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config(overrides=[
            "search.iddfs.max_depth=20",
            "search.astar.heuristic=manhattan"
        ])

        assert config.search.iddfs.max_depth == 20
        assert config.search.astar.heuristic == "manhattan"

    def test_get_parameter(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        assert manager.get_parameter("solver.grid_size") == 9
        assert manager.get_parameter("search.edge_cost.seed") == 42
        assert manager.get_parameter("nonexistent.param", "default") == "default"

    def test_set_parameter(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        manager.set_parameter("search.edge_cost.mode", "random")
        assert manager.get_parameter("search.edge_cost.mode") == "random"

        manager.set_parameter("new.parameter", "test_value")
        assert manager.get_parameter("new.parameter") == "test_value"

    def test_update_config(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        manager.update_config({
            "solver.algorithm": "B",
            "search.heuristics.minkowski_p": 4.0
        })

        assert manager.get_parameter("solver.algorithm") == "B"
        assert manager.get_parameter("search.heuristics.minkowski_p") == 4.0

    def test_save_config(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        manager.load_config()
        manager.set_parameter("io.benchmark.data_dir", "results")

        output_file = temp_config_dir / "saved_config.yaml"
        manager.save_config(output_file)

        saved_config = OmegaConf.load(output_file)
        assert saved_config.io.benchmark.data_dir == "results"

    def test_to_yaml(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        assert manager.to_yaml() == "No configuration loaded."
        manager.load_config()
        assert "candidate_count" in manager.to_yaml()

    def test_config_without_loading(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.get_parameter("solver.algorithm")

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.set_parameter("solver.algorithm", "B")

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.update_config({"solver.algorithm": "B"})

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.save_config("test.yaml")

    def test_search_config(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        manager.load_config(overrides=[
            "search.iddfs.max_depth=7",
            "search.edge_cost.mode=random",
            "search.edge_cost.seed=3"
        ])

        search_config = manager.search_config()
        assert search_config.max_depth == 7
        assert search_config.edge_cost_mode == "random"
        assert search_config.edge_cost_seed == 3
        assert search_config.astar_heuristic == "candidate_count"

    def test_apply_log_level(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        manager.load_config(overrides=["solver.log_level=debug"])

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        try:
            assert manager.apply_log_level() == logging.DEBUG
            assert package_logger.level == logging.DEBUG
        finally:
            package_logger.setLevel(logging.NOTSET)

    def test_project_config_is_valid(self):
        """The shipped conf/config.yaml loads and validates."""
        config = ConfigManager(default_config_dir()).load_config()
        assert SearchConfig.from_config(config) == SearchConfig()


class TestGlobalConfigFunctions:
    """Test global configuration functions."""

    def test_load_config_global(self, temp_config_dir):
        config = load_config(config_dir=temp_config_dir)

        assert isinstance(config, DictConfig)
        assert get_config() is config
        assert get_parameter("search.greedy.heuristic") == "empty_cells"
        assert get_parameter("missing.key", 3) == 3

    def test_load_config_with_overrides_global(self, temp_config_dir):
        config = load_config(overrides=["solver.algorithm=U"], config_dir=temp_config_dir)
        assert config.solver.algorithm == "U"


class TestConfigContext:
    """Test ConfigContext context manager."""

    def test_config_context(self, temp_config_dir):
        """Changes apply inside the block and are reverted afterwards."""
        load_config(config_dir=temp_config_dir)

        with ConfigContext(**{"search.astar.heuristic": "manhattan"}) as config:
            assert OmegaConf.select(config, "search.astar.heuristic") == "manhattan"
            assert get_parameter("search.astar.heuristic") == "manhattan"

        assert get_parameter("search.astar.heuristic") == "candidate_count"


class TestConfigValidation:
    """Test configuration validators."""

    def test_valid_config(self):
        validate_config(OmegaConf.create(CONFIG_CONTENT))

    def test_empty_config(self):
        validate_config(OmegaConf.create({}))

    @pytest.mark.parametrize("override", [
        "solver.algorithm=X",
        "solver.grid_size=4",
        "solver.log_level=LOUD",
        "search.iddfs.max_depth=-3",
        "search.astar.heuristic=telepathy",
        "search.greedy.heuristic=telepathy",
        "search.heuristics.minkowski_p=-1",
        "search.edge_cost.mode=gaussian",
    ])
    def test_invalid_override_rejected(self, temp_config_dir, override):
        manager = ConfigManager(temp_config_dir)
        with pytest.raises(ConfigValidationError):
            manager.load_config(overrides=[override])

    def test_validation_can_be_skipped(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config(overrides=["solver.algorithm=X"], validate=False)
        assert config.solver.algorithm == "X"

    @pytest.mark.parametrize("data_dir", ["", 5])
    def test_invalid_data_dir(self, data_dir):
        config = OmegaConf.create({'io': {'benchmark': {'data_dir': data_dir}}})
        with pytest.raises(ConfigValidationError):
            validate_config(config)
