"""Application settings singleton - single source of truth for configuration

This module provides a singleton Settings class that consolidates:
1. Jump-zone geometry and scoring constants (tuned by feel, not configurable)
2. Runtime configuration from config.yml

Usage:
    from smartjump.common.settings import settings

    # Initialize once at startup with loaded config
    config = ConfigLoader.config_load()
    settings.initialize(config)

    # Use anywhere in the application
    if score < settings.ACCEPT_THRESHOLD:
        ...
"""

from typing import Optional

from smartjump.common.config import Config


class Settings:
    """Singleton settings manager combining config.yml and jump constants

    The scoring constants encode the felt correctness of the jump heuristic
    and were tuned on real monitor arrangements. Keep their values unless
    recalibrating against hardware.
    """

    _instance: Optional["Settings"] = None

    def __new__(cls) -> "Settings":
        """Ensure only one Settings instance exists"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize settings singleton (only runs once)"""
        if hasattr(self, "_initialized"):
            return
        self._initialized = True
        self._config: Optional[Config] = None

    def initialize(self, config: Config) -> None:
        """
        Initialize with loaded configuration

        Args:
            config: Loaded application configuration
        """
        self._config = config

    # =========================================================================
    # Zone Compiler Constants
    # =========================================================================

    ADJACENCY_TOLERANCE_PX: int = 10
    """How far a target may overlap a source edge and still count as beyond it"""

    ZONE_MARGIN_PX: int = 100
    """Widening of the source-side range around the target's span"""

    LANDING_INSET_PX: int = 10
    """Inward offset from the target's edge for the landing point

    Also used to keep the landing point off the target's own shared-axis
    edges, which would immediately retrigger an edge condition.
    """

    # =========================================================================
    # Scorer Constants
    # =========================================================================

    CONTAINMENT_SCORE: int = 1000
    """Score when the cursor coordinate lies inside the target's span"""

    MISS_BASE_SCORE: int = 500
    """Base score for a miss, reduced by the distance to the target's span"""

    DIRECTION_NOISE_PX: int = 10
    """Per-tick velocity on the shared axis below which direction is ignored"""

    DIRECTION_BONUS: int = 800
    """Bonus when the cursor is visibly moving toward the target's center"""

    ACCEPT_THRESHOLD: int = 200
    """Minimum best score required to perform a jump"""

    # =========================================================================
    # Controller Constants
    # =========================================================================

    HEARTBEAT_TICKS: int = 250
    """Ticks between debug heartbeat log lines (5s at 20ms polling)"""

    # =========================================================================
    # Runtime Configuration Access
    # =========================================================================

    @property
    def config(self) -> Config:
        """
        Get loaded configuration object

        Raises:
            RuntimeError: If initialize() has not been called
        """
        if self._config is None:
            raise RuntimeError("Settings not initialized. Call settings.initialize(config) first.")
        return self._config


# Global singleton instance
settings = Settings()
"""Global settings singleton instance

Import this anywhere in the application:
    from smartjump.common.settings import settings
"""
