"""
Settings Manager - Persists duct sizing defaults using QSettings
"""

from PySide6.QtCore import QSettings

from calculations.hvac_constants import (
    DEFAULT_FRICTION_RATE_INWG, DEFAULT_VELOCITY_FPM, DEFAULT_INSULATION_IN,
    DEFAULT_SYSTEM_TYPE, VELOCITY_LIMITS, is_standard_insulation,
)
from calculations.result_types import PressurePreset, SelectionPolicy


class SettingsManager:
    """Manages duct sizing defaults using QSettings"""

    ORGANIZATION = "Duct Sizing"
    APPLICATION = "Duct Sizing Calculator"

    # Settings keys
    KEY_FRICTION_RATE = "sizing/friction_rate"
    KEY_VELOCITY = "sizing/velocity"
    KEY_INSULATION = "sizing/insulation"
    KEY_SELECTION_POLICY = "sizing/selection_policy"
    KEY_PRESSURE_PRESET = "sizing/pressure_preset"
    KEY_SYSTEM_TYPE = "sizing/system_type"

    def __init__(self, settings_path: str = None):
        """
        Initialize the settings manager

        Args:
            settings_path: Optional INI file path; the platform store is used otherwise
        """
        if settings_path:
            self.settings = QSettings(settings_path, QSettings.Format.IniFormat)
        else:
            self.settings = QSettings(SettingsManager.ORGANIZATION, SettingsManager.APPLICATION)

    def _positive_float(self, key: str, default: float) -> float:
        try:
            value = float(self.settings.value(key, default))
        except (TypeError, ValueError):
            return default
        return value if value > 0 else default

    def get_friction_rate(self) -> float:
        """Default friction rate in in.wg/100ft"""
        return self._positive_float(self.KEY_FRICTION_RATE, DEFAULT_FRICTION_RATE_INWG)

    def get_velocity(self) -> float:
        """Default velocity in FPM"""
        return self._positive_float(self.KEY_VELOCITY, DEFAULT_VELOCITY_FPM)

    def get_insulation(self) -> float:
        """Default liner thickness; non-standard stored values fall back to none"""
        try:
            value = float(self.settings.value(self.KEY_INSULATION, DEFAULT_INSULATION_IN))
        except (TypeError, ValueError):
            return DEFAULT_INSULATION_IN
        return value if is_standard_insulation(value) else DEFAULT_INSULATION_IN

    def get_selection_policy(self) -> SelectionPolicy:
        value = self.settings.value(self.KEY_SELECTION_POLICY, SelectionPolicy.NARROW.value)
        try:
            return SelectionPolicy(value)
        except ValueError:
            return SelectionPolicy.NARROW

    def get_pressure_preset(self) -> PressurePreset:
        value = self.settings.value(self.KEY_PRESSURE_PRESET, PressurePreset.LOW.value)
        try:
            return PressurePreset(value)
        except ValueError:
            return PressurePreset.LOW

    def get_system_type(self) -> str:
        value = self.settings.value(self.KEY_SYSTEM_TYPE, DEFAULT_SYSTEM_TYPE)
        return value if value in VELOCITY_LIMITS else DEFAULT_SYSTEM_TYPE

    def set_defaults(self, friction_rate: float = None, velocity: float = None,
                     insulation: float = None, selection_policy: SelectionPolicy = None,
                     pressure_preset: PressurePreset = None, system_type: str = None):
        """
        Store sizing defaults; arguments left as None are unchanged

        Raises:
            ValueError: for non-positive constraints, a non-standard liner or
                an unknown system type
        """
        if friction_rate is not None:
            if friction_rate <= 0:
                raise ValueError("Default friction rate must be positive")
            self.settings.setValue(self.KEY_FRICTION_RATE, float(friction_rate))
        if velocity is not None:
            if velocity <= 0:
                raise ValueError("Default velocity must be positive")
            self.settings.setValue(self.KEY_VELOCITY, float(velocity))
        if insulation is not None:
            if not is_standard_insulation(insulation):
                raise ValueError(f"Insulation {insulation} is not a standard liner thickness")
            self.settings.setValue(self.KEY_INSULATION, float(insulation))
        if selection_policy is not None:
            self.settings.setValue(self.KEY_SELECTION_POLICY, SelectionPolicy(selection_policy).value)
        if pressure_preset is not None:
            self.settings.setValue(self.KEY_PRESSURE_PRESET, PressurePreset(pressure_preset).value)
        if system_type is not None:
            if system_type not in VELOCITY_LIMITS:
                raise ValueError(f"Unknown system type: {system_type}")
            self.settings.setValue(self.KEY_SYSTEM_TYPE, system_type)
        self.settings.sync()

    def clear(self):
        """Revert all sizing defaults"""
        self.settings.remove("sizing")
        self.settings.sync()


# Global instance
_settings_manager = None


def get_settings_manager():
    """Get the global settings manager instance"""
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager
