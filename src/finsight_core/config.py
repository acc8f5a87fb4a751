"""Configuration system for the Finsight projection engine.

This module provides Pydantic Settings-based configuration with environment
variable support. The defaults are the model assumptions the engines were
calibrated with, so an empty environment reproduces the reference results.

Usage:
    from finsight_core.config import FinsightConfig

    # Load from environment variables and .env file
    config = FinsightConfig()

    # Access amortization settings
    print(config.amortization.max_months)

    # Access life-stage simulation assumptions
    print(config.simulation.salary_growth_rate)
"""

from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AmortizationSettings(BaseSettings):
    """Debt payoff simulation settings.

    Environment Variables:
        FINSIGHT_DEBT_MAX_MONTHS: Hard cutoff for a payoff run (default 50 years)
        FINSIGHT_DEBT_DISPLAY_MONTHS: Monthly snapshots kept for presentation
        FINSIGHT_DEBT_PARALLEL_COMPARISON: Run the strategy comparison in threads
    """

    model_config = SettingsConfigDict(
        env_prefix="FINSIGHT_DEBT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_months: int = Field(
        default=600,
        gt=0,
        description="Maximum number of simulated months before the run is cut off",
    )
    display_months: int = Field(
        default=120,
        gt=0,
        description="Number of leading monthly snapshots kept in results",
    )
    parallel_comparison: bool = Field(
        default=False,
        description="Run the per-strategy simulations on a thread pool",
    )


class SimulationSettings(BaseSettings):
    """Life-stage simulation assumptions.

    Environment Variables:
        FINSIGHT_SIM_SALARY_GROWTH_RATE: Raise applied once per simulated year
        FINSIGHT_SIM_INVESTMENT_RETURN_RATE: Annual investment return
        FINSIGHT_SIM_CONTRIBUTION_RATE: Share of annual salary invested
        FINSIGHT_SIM_DEBT_PAYMENT_RATE: Share of the starting debt paid monthly
        FINSIGHT_SIM_MINIMUM_DEBT_PAYMENT: Floor for the monthly debt payment
        FINSIGHT_SIM_END_AGE: Age at which the simulation completes
        FINSIGHT_SIM_MAX_RECENT_EVENTS: Number of life events retained
    """

    model_config = SettingsConfigDict(
        env_prefix="FINSIGHT_SIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    salary_growth_rate: Decimal = Field(
        default=Decimal("0.03"),
        ge=0,
        description="Fractional salary increase applied at each year boundary",
    )
    investment_return_rate: Decimal = Field(
        default=Decimal("0.07"),
        ge=0,
        description="Annual return compounded over the elapsed fraction of a year",
    )
    contribution_rate: Decimal = Field(
        default=Decimal("0.10"),
        ge=0,
        le=1,
        description="Fraction of annual salary contributed to investments",
    )
    debt_payment_rate: Decimal = Field(
        default=Decimal("0.02"),
        ge=0,
        le=1,
        description="Monthly debt payment as a fraction of the starting debt",
    )
    minimum_debt_payment: Decimal = Field(
        default=Decimal("300"),
        ge=0,
        description="Lower bound for the monthly debt payment",
    )
    end_age: int = Field(
        default=90,
        gt=0,
        le=150,
        description="Simulated age at which the run completes",
    )
    max_recent_events: int = Field(
        default=5,
        ge=0,
        description="Number of recent life events retained, newest first",
    )


class FinsightConfig(BaseSettings):
    """Root configuration for the Finsight engine.

    Environment Variables:
        FINSIGHT_ENV: Environment name (development, staging, production, test)
        FINSIGHT_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        FINSIGHT_LOG_JSON: Render log records as JSON lines

    Example:
        # Override specific settings
        config = FinsightConfig(
            simulation=SimulationSettings(end_age=95),
            log_level="debug",
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="FINSIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Render log output as JSON instead of console text",
    )

    amortization: AmortizationSettings = Field(default_factory=AmortizationSettings)
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"
