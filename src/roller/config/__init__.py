"""Configuration loading."""

from roller.config.settings import AppConfig, SimulationSize, get_config, reset_config

__all__ = ["AppConfig", "SimulationSize", "get_config", "reset_config"]
