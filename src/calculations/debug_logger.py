"""
Debug logging framework for duct sizing calculations
Centralizes and standardizes debug output across the calculation system
"""

import os
import logging
from typing import Any, Dict, List, Optional
import json
from enum import Enum

from .hvac_constants import DEBUG_DECIMAL_PLACES


class DuctSizingDebugLogger:
    """Centralized debug logger for the duct sizing system"""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._setup_logger()
            DuctSizingDebugLogger._initialized = True

    def _setup_logger(self):
        """Initialize the logging configuration"""
        # Check environment variable for debug level
        env_val = str(os.environ.get("DUCT_DEBUG_EXPORT", "")).strip().lower()
        self.debug_enabled = env_val in {"1", "true", "yes", "on"}

        debug_level = os.environ.get("DUCT_DEBUG_LEVEL", "INFO").upper()

        self.logger = logging.getLogger('duct_debug')
        self.logger.setLevel(getattr(logging, debug_level, logging.INFO))

        # Clear existing handlers
        self.logger.handlers.clear()

        if self.debug_enabled:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.DEBUG)

            # Format with timestamp and component
            formatter = logging.Formatter(
                '%(asctime)s [DUCT-%(levelname)s] %(component)s: %(message)s',
                datefmt='%H:%M:%S'
            )
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

            if os.environ.get("DUCT_DEBUG_FILE"):
                file_handler = logging.FileHandler('duct_debug.log')
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(formatter)
                self.logger.addHandler(file_handler)

    def reload(self):
        """Re-read the DUCT_DEBUG_* environment variables"""
        self._setup_logger()

    def _log(self, level: int, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        if not self.debug_enabled:
            return
        if data:
            message = f"{message} {self._format_debug_data(data)}"
        self.logger.log(level, message, extra={'component': component})

    def debug(self, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        """Log debug message with component context"""
        self._log(logging.DEBUG, component, message, data)

    def info(self, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        """Log info message with component context"""
        self._log(logging.INFO, component, message, data)

    def warning(self, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        """Log warning message with component context"""
        self._log(logging.WARNING, component, message, data)

    def error(self, component: str, message: str, error: Optional[Exception] = None, data: Optional[Dict[str, Any]] = None):
        """Log error message with component context"""
        if error:
            message += f" Error: {str(error)}"
        self._log(logging.ERROR, component, message, data)

    def _format_debug_data(self, data: Dict[str, Any]) -> str:
        """Format debug data for logging"""
        formatted = {}
        for key, value in data.items():
            if isinstance(value, float) and key.endswith(('_fpm', '_cfm')):
                formatted[key] = round(value, 1)
            elif isinstance(value, float) and key.endswith(('_in', '_sqft', '_inwg', '_ratio')):
                formatted[key] = round(value, DEBUG_DECIMAL_PLACES)
            elif isinstance(value, Enum):
                formatted[key] = value.value
            else:
                formatted[key] = value
        return json.dumps(formatted, separators=(',', ':'), default=str)

    def log_calculation_start(self, component: str, calculation_type: str, inputs: Optional[Dict] = None):
        """Log the start of a calculation"""
        data = {'calculation_type': calculation_type}
        if inputs:
            data.update(inputs)
        self.info(component, "Starting calculation", data)

    def log_calculation_end(self, component: str, calculation_type: str, success: bool, result_summary: Optional[Dict] = None):
        """Log the end of a calculation"""
        status = "completed" if success else "failed"
        data = {'calculation_type': calculation_type, 'status': status}
        if result_summary:
            data.update(result_summary)
        self.info(component, "Calculation finished", data)

    def log_candidate_search(self, component: str, policy: str, target_area_sqft: float,
                             enumerated: int, in_band: int, returned: int):
        """Log rectangular candidate search statistics"""
        data = {
            'policy': policy,
            'target_area_sqft': target_area_sqft,
            'enumerated': enumerated,
            'in_band': in_band,
            'returned': returned,
        }
        if returned == 0:
            self.warning(component, "No rectangular candidate within tolerance band", data)
        else:
            self.debug(component, "Rectangular candidates selected", data)

    def log_validation_result(self, component: str, is_valid: bool, errors: List[str], warnings: List[str]):
        """Log validation results"""
        data = {
            'is_valid': is_valid,
            'error_count': len(errors),
            'warning_count': len(warnings)
        }
        if errors:
            data['errors'] = errors
        if warnings:
            data['warnings'] = warnings

        if is_valid:
            self.info(component, "Validation passed", data)
        else:
            self.warning(component, "Validation failed", data)


# Global logger instance
debug_logger = DuctSizingDebugLogger()
