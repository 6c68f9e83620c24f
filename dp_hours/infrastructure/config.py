"""Module for the Config class."""
import logging
import logging.config
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from dp_hours.i18n import setup_i18n
from dp_hours.infrastructure.persistence.yaml_repository import YamlRecordRepository
from dp_hours.services.session.shift_calculator import Shift, ShiftCalculator
from dp_hours.services.validation.sequence_validator import (
    DEFAULT_COOLDOWN,
    DEFAULT_TOLERANCE,
    SequenceValidator,
)

logger = logging.getLogger(__name__)

DEFAULT_SHIFTS = (Shift.parse("day", "00:00", "23:59"),)


class Config:
    """A class to store the configuration."""

    def __init__(self) -> None:
        self.records_path = Path("dp_hours.yaml")
        # Validation rules
        self.tolerance = DEFAULT_TOLERANCE
        self.cooldown = DEFAULT_COOLDOWN
        # Reports
        self.shifts: tuple[Shift, ...] = DEFAULT_SHIFTS
        self.language = "en"
        self.logging_config: dict[str, Any] | None = None

    def __parse_yaml(self, yaml_path: Path) -> None:
        """Parse a YAML configuration file."""
        with open(yaml_path, encoding="utf-8") as file:
            config = yaml.safe_load(file) or {}

        if "records_path" in config:
            self.records_path = Path(config["records_path"])
        if "tolerance_minutes" in config:
            self.tolerance = timedelta(minutes=int(config["tolerance_minutes"]))
        if "cooldown_minutes" in config:
            self.cooldown = timedelta(minutes=int(config["cooldown_minutes"]))
        if shifts := config.get("shifts"):
            self.shifts = tuple(
                Shift.parse(str(shift["id"]), str(shift["start"]), str(shift["end"]))
                for shift in shifts
            )
        self.language = config.get("language", self.language)
        self.logging_config = config.get("logging")

    def parse(self, config_path: Path) -> None:
        """Parse a configuration file."""
        if config_path.suffix in (".yaml", ".yml"):
            self.__parse_yaml(config_path)
        else:
            raise ValueError(f"Unsupported file format: '{config_path.suffix}'")

    def setup_logging(self) -> None:
        """Configure logging from the config, or log to a file in the user data dir."""
        if self.logging_config is None:
            log_dir = Path.home() / ".local" / "share" / "dp-hours"
            log_dir.mkdir(parents=True, exist_ok=True)
            logging.basicConfig(
                filename=log_dir / "dp-hours.log",
                level=logging.INFO,
                format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            )
            return

        try:
            logging.config.dictConfig(self.logging_config)
        except (ValueError, TypeError, AttributeError, ImportError) as e:
            logging.basicConfig(level=logging.INFO)
            logger.warning("Invalid logging configuration, using defaults: %s", e)

    def setup_i18n(self) -> None:
        """Install the translations of the configured language."""
        setup_i18n(self.language)

    def create_validator(self) -> SequenceValidator:
        """Build the sequence validator with the configured rules."""
        return SequenceValidator(tolerance=self.tolerance, cooldown=self.cooldown)

    def create_shift_calculator(self) -> ShiftCalculator:
        """Build the shift calculator with the configured shifts."""
        return ShiftCalculator(self.shifts)

    def create_repository(self) -> YamlRecordRepository:
        """Open the record file."""
        return YamlRecordRepository(self.records_path)
